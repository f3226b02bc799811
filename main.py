#!/usr/bin/env python3

##############################################
#                                            #
#         PLUGIN REACT AGENT                 #
#                                            #
##############################################

import os
from typing import List
from uuid import uuid4

from dotenv import load_dotenv

from plugin_agent.exceptions import ToolNotFoundError
from plugin_agent.models import ActionDecision, StepRecord, TaskExecutionContext
from plugin_agent.prebuilt import build_agent
from utils.cli import print_decision, read_observation, read_user_goal
from utils.load_config import DEFAULT_CONFIG_PATH, load_config

from utils.logger import get_logger, init_logger
logger = get_logger(__name__)


def main() -> None:
    init_logger(DEFAULT_CONFIG_PATH)
    load_dotenv()
    config = load_config()

    api_key = os.getenv("LLM_API_KEY")
    agent = build_agent(config, base_dir=DEFAULT_CONFIG_PATH.parent, api_key=api_key)
    logger.info("🤖 Agent started. Enter goals to get started…", variant=agent.variant.name)

    while True:
        goal_text = None
        try:
            goal_text = read_user_goal()
            if not goal_text:  # Skip empty inputs
                continue

            context = TaskExecutionContext(api_key=api_key, conversation_id=uuid4().hex)
            records: List[StepRecord] = []
            for _ in range(config.agent.max_steps):
                decision = agent.step(context, config.agent.enabled_tools, goal_text, records, verbose=config.agent.verbose)
                print_decision(decision)
                if not isinstance(decision, ActionDecision):
                    break
                records.append(StepRecord.from_decision(decision, read_observation(decision)))
            else:
                logger.warning("max_steps_reached", max_steps=config.agent.max_steps)

        except KeyboardInterrupt:
            logger.info("🤖 Bye!")
            break

        except ToolNotFoundError as exc:
            logger.error("tool_not_found", goal=goal_text, tool_name=exc.tool_name)

        except Exception as exc:
            logger.exception("step_failed", goal=goal_text, error=str(exc))


if __name__ == "__main__":
    main()
