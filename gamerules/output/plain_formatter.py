"""Plain text output formatter -- no ANSI escapes."""

from __future__ import annotations

from gamerules.models import CommandOutcome, RuleInfo


def _header(title: str) -> str:
    """Create a plain text section header."""
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}\n"


class PlainFormatter:
    """Format results as plain text without ANSI escapes."""

    def format_rules(self, rules: list[RuleInfo]) -> str:
        """Format a rule listing as aligned columns."""
        lines: list[str] = [_header("Game Rules")]
        if not rules:
            lines.append("  No rules registered.")
            return "\n".join(lines)

        width = max(25, max(len(r.name) for r in rules))
        lines.append(f"  {'Rule':<{width}} {'Kind':<16} {'Value':<16} Default")
        lines.append(f"  {'-' * width} {'-' * 16} {'-' * 16} {'-' * 16}")
        for r in rules:
            marker = "" if r.is_default else " *"
            lines.append(f"  {r.name:<{width}} {r.kind:<16} {r.value:<16} {r.default}{marker}")

        changed = sum(1 for r in rules if not r.is_default)
        lines.append("")
        lines.append(f"  {len(rules)} rules, {changed} changed from default")
        return "\n".join(lines)

    def format_outcome(self, outcome: CommandOutcome) -> str:
        return f"{outcome.message}\nResult: {outcome.result}"
