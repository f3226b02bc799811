"""In-process tool registry backed by a dict, optionally loaded from YAML."""
from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

import yaml

from plugin_agent.exceptions import ToolNotFoundError
from plugin_agent.models import Plugin, TaskExecutionContext
from plugin_agent.tools.base import ToolRegistryBase

from utils.logger import get_logger, trace_method
logger = get_logger(__name__)

_PLUGIN_FIELDS = {f.name for f in fields(Plugin)}


class InMemoryToolRegistry(ToolRegistryBase):
    """Registry of ``Plugin`` records keyed by id.

    A plugin is enabled by its ``id``; when the id is empty, ``name_for_model``
    is used instead.
    """

    def __init__(self, plugins: Iterable[Plugin] | None = None):
        self._plugins: Dict[str, Plugin] = {}
        for plugin in plugins or []:
            self.register(plugin)

    def register(self, plugin: Plugin) -> Plugin:
        key = plugin.id or plugin.name_for_model
        if key in self._plugins:
            raise ValueError(f"Duplicate tool id '{key}'")
        if any(p.name_for_model == plugin.name_for_model for p in self._plugins.values()):
            raise ValueError(f"Duplicate name_for_model '{plugin.name_for_model}'")
        self._plugins[key] = plugin
        return plugin

    @trace_method
    def list_tools(self, context: TaskExecutionContext, enabled: Sequence[str]) -> List[Plugin]:
        tools: List[Plugin] = []
        for tool_id in enabled:
            plugin = self._plugins.get(tool_id)
            if plugin is None:
                raise ToolNotFoundError(tool_id)
            tools.append(plugin)
        logger.debug("tools_listed", conversation_id=context.conversation_id, count=len(tools))
        return tools

    @classmethod
    def from_yaml(cls, path: str | Path) -> "InMemoryToolRegistry":
        """Load plugins from a YAML file with a top-level ``plugins`` list."""
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"Tools file not found: {p}")
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict) or not isinstance(data.get("plugins", []), list):
            raise TypeError(f"Tools file must be a mapping with a 'plugins' list: {p}")
        return cls(_plugin_from_dict(entry) for entry in data.get("plugins", []))


def _plugin_from_dict(entry: Dict[str, Any]) -> Plugin:
    known = {k: v for k, v in entry.items() if k in _PLUGIN_FIELDS and k != "extra"}
    extra = {k: v for k, v in entry.items() if k not in _PLUGIN_FIELDS}
    extra.update(entry.get("extra") or {})
    known.setdefault("name_for_human", known.get("name_for_model", ""))
    known.setdefault("description_for_human", known.get("description_for_model", ""))
    return Plugin(**known, extra=extra)
