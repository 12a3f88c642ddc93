"""Exception hierarchy for the rule registry and its reference host."""

from typing import Optional


class GameRulesError(Exception):
    """Base class for every error raised by gamerules."""


class DuplicateRuleError(GameRulesError):
    """A rule with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Rule already registered: '{name}'")
        self.name = name


class NoSuchRuleError(GameRulesError, LookupError):
    """No rule exists for a name or key."""

    def __init__(self, name: Optional[str], detail: str = "") -> None:
        message = "null" if name is None else f"'{name}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.name = name


class DuplicateCallbackError(GameRulesError, ValueError):
    """The same change callback was added twice to one rule type."""


class InvalidValueError(GameRulesError, ValueError):
    """A value is not acceptable for a rule's kind."""


class InvalidDefaultError(InvalidValueError):
    """A rule type was created with a default its kind rejects."""


class CommandSyntaxError(GameRulesError):
    """A command argument could not be read as the requested type."""

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        super().__init__(message)
        self.text = text
        self.position = position

    def format(self) -> str:
        """Render the error with a caret under the offending position."""
        if not self.text:
            return str(self)
        return f"{self}\n  {self.text}\n  {' ' * self.position}^"


class ExtensionLoadError(GameRulesError):
    """An extension module failed to import or register its rules."""

    def __init__(self, module: str, cause: BaseException) -> None:
        super().__init__(f"Failed to load extension {module!r}: {cause}")
        self.module = module
        self.cause = cause


class ConfigError(GameRulesError):
    """The configuration file could not be read."""
