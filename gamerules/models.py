"""Data models for gamerules.

Pydantic models for command outcomes, rule listings and persisted rule
state, plus the command argument types the host reader understands.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ArgumentType(str, Enum):
    """Argument types a command reader can produce."""

    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"


class RuleInfo(BaseModel):
    """One row of a rule listing."""

    name: str
    kind: str
    default: str
    value: str
    builtin: bool = False
    observers: int = Field(default=0, ge=0)

    @property
    def is_default(self) -> bool:
        return self.value == self.default


class CommandOutcome(BaseModel):
    """Result of running a gamerule command against a server."""

    rule: str
    value: str
    result: int
    changed: bool = False
    message: str


class SavedRules(BaseModel):
    """Persisted rule values for one server, as opaque encoded strings."""

    server: str = "server"
    rules: dict[str, str] = Field(default_factory=dict)
    saved_at: datetime = Field(default_factory=datetime.now)
