"""Configuration for the gamerules host: state location, extensions, logging.

Read from YAML at ~/.gamerules/config.yaml, or the path in $GAMERULES_CONFIG.
A missing file yields the defaults.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from gamerules.errors import ConfigError

_DEFAULT_CONFIG_PATH = Path.home() / ".gamerules" / "config.yaml"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class GameRulesConfig(BaseModel):
    """Host configuration."""

    state_path: Path = Field(default_factory=lambda: Path.home() / ".gamerules" / "rules.json")
    server_name: str = "server"
    extensions: list[str] = Field(default_factory=list)
    log_level: str = "WARNING"

    @field_validator("state_path", mode="before")
    @classmethod
    def expand_user(cls, v):
        return Path(v).expanduser() if isinstance(v, (str, Path)) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_level(cls, v: str) -> str:
        level = v.upper() if isinstance(v, str) else v
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def config_path() -> Path:
    """Location of the config file, honoring $GAMERULES_CONFIG."""
    override = os.environ.get("GAMERULES_CONFIG")
    return Path(override).expanduser() if override else _DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> GameRulesConfig:
    """Load the config file, falling back to defaults when it does not exist.

    Raises:
        ConfigError: The file is not valid YAML or fails validation.
    """
    path = path or config_path()
    if not path.exists():
        return GameRulesConfig()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        msg = f"YAML parse error in {path}"
        if hasattr(exc, "problem_mark") and exc.problem_mark is not None:
            mark = exc.problem_mark
            msg += f" at line {mark.line + 1}, column {mark.column + 1}"
        if hasattr(exc, "problem") and exc.problem:
            msg += f": {exc.problem}"
        raise ConfigError(msg) from exc

    if raw is None:
        return GameRulesConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(raw).__name__}")

    try:
        return GameRulesConfig(**raw)
    except ValidationError as exc:
        lines = [f"Invalid configuration in {path}:"]
        for err in exc.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise ConfigError("\n".join(lines)) from exc
