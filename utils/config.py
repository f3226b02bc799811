from __future__ import annotations
import dataclasses
from typing import List, Optional

@dataclasses.dataclass
class LLM:
    model: str
    temperature: float = 0.0
    max_tokens: Optional[int] = None
    timeout: Optional[float] = None

@dataclasses.dataclass
class Agent:
    variant: str = "not_conversational"
    verbose: bool = False
    max_steps: int = 10
    tools_file: Optional[str] = None
    enabled_tools: List[str] = dataclasses.field(default_factory=list)

@dataclasses.dataclass
class LoggingConsole:
    colour_enabled: bool = True

@dataclasses.dataclass
class LoggingFileRotation:
    enabled: bool = True
    max_bytes: int = 10_000_000
    backup_count: int = 5

@dataclasses.dataclass
class LoggingFile:
    enabled: bool = False
    level: str = "DEBUG"
    path: str = "logs/agent.log"
    rotation: LoggingFileRotation = dataclasses.field(default_factory=LoggingFileRotation)

@dataclasses.dataclass
class LoggingLibraries:
    LiteLLM: str = "WARNING"
    httpx: str = "WARNING"
    httpcore: str = "WARNING"

@dataclasses.dataclass
class Logging:
    level: str = "INFO"
    console: LoggingConsole = dataclasses.field(default_factory=LoggingConsole)
    file: LoggingFile = dataclasses.field(default_factory=LoggingFile)
    libraries: LoggingLibraries = dataclasses.field(default_factory=LoggingLibraries)

@dataclasses.dataclass
class Config:
    llm: LLM
    agent: Agent = dataclasses.field(default_factory=Agent)
    logging: Logging = dataclasses.field(default_factory=Logging)
