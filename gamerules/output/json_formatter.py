"""JSON output formatter -- valid JSON suitable for piping to jq."""

from __future__ import annotations

import json

from gamerules.models import CommandOutcome, RuleInfo


class JsonFormatter:
    """Format results as indented JSON."""

    def format_rules(self, rules: list[RuleInfo]) -> str:
        data = {"rules": [r.model_dump(mode="json") for r in rules]}
        return json.dumps(data, indent=2)

    def format_outcome(self, outcome: CommandOutcome) -> str:
        return json.dumps(outcome.model_dump(mode="json"), indent=2)
