"""Output formatters for gamerules.

Provides a Formatter protocol and three implementations:
- RichFormatter: colored Rich tables
- PlainFormatter: plain text without ANSI escapes
- JsonFormatter: valid JSON for piping to jq
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gamerules.models import CommandOutcome, RuleInfo


class Formatter(Protocol):
    """Protocol for formatting rule listings and command outcomes."""

    def format_rules(self, rules: list[RuleInfo]) -> str:
        """Format a rule listing."""
        ...

    def format_outcome(self, outcome: CommandOutcome) -> str:
        """Format the outcome of a gamerule command."""
        ...


def get_formatter(name: str = "rich") -> Formatter:
    """Get a formatter by name.

    Args:
        name: One of "rich", "plain", "json".

    Raises:
        ValueError: If the name is not recognized.
    """
    if name == "rich":
        from gamerules.output.rich_formatter import RichFormatter

        return RichFormatter()
    elif name == "plain":
        from gamerules.output.plain_formatter import PlainFormatter

        return PlainFormatter()
    elif name == "json":
        from gamerules.output.json_formatter import JsonFormatter

        return JsonFormatter()
    else:
        raise ValueError(f"Unknown formatter: {name!r}. Use 'rich', 'plain', or 'json'.")
