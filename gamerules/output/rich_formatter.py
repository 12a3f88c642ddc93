"""Rich-based output formatter with colored tables."""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gamerules.models import CommandOutcome, RuleInfo

# Kind label -> Rich style mapping
_KIND_STYLES = {
    "boolean": "cyan",
    "int": "green",
    "float": "yellow",
    "double": "yellow",
    "string": "magenta",
}


def _render(renderable) -> str:
    """Render a Rich object to a string."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120)
    console.print(renderable)
    return buf.getvalue()


class RichFormatter:
    """Format results using Rich tables."""

    def format_rules(self, rules: list[RuleInfo]) -> str:
        table = Table(title="Game Rules", show_lines=False)
        table.add_column("Rule", style="bold")
        table.add_column("Kind")
        table.add_column("Value")
        table.add_column("Default", style="dim")
        table.add_column("Source", style="dim")

        for r in rules:
            kind_style = _KIND_STYLES.get(r.kind, "blue")
            value_style = "" if r.is_default else "bold yellow"
            table.add_row(
                r.name,
                Text(r.kind, style=kind_style),
                Text(r.value, style=value_style),
                r.default,
                "built-in" if r.builtin else "extension",
            )
        return _render(table)

    def format_outcome(self, outcome: CommandOutcome) -> str:
        text = Text(outcome.message, style="bold green" if outcome.changed else "")
        text.append(f"  (result {outcome.result})", style="dim")
        return _render(text)
