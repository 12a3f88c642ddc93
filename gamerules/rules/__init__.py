"""Rule types, keys, instances and the host's built-in rules."""

from gamerules.rules.base import Rule, RuleKey, RuleType, create_type, noop

__all__ = ["Rule", "RuleKey", "RuleType", "create_type", "noop"]
