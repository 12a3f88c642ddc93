"""gamerules -- typed, extensible game rules.

Extensions declare new rules at load time with the same guarantees the
host gives its built-in rules: unique names, typed parsing and encoding,
ordered change notification and command integration.
"""

from gamerules.errors import (
    CommandSyntaxError,
    DuplicateCallbackError,
    DuplicateRuleError,
    GameRulesError,
    InvalidDefaultError,
    InvalidValueError,
    NoSuchRuleError,
)
from gamerules.kinds import BOOLEAN, DOUBLE, FLOAT, INT, STRING, RuleKind, enum_kind
from gamerules.registry import (
    Registry,
    boolean_rule,
    default_registry,
    double_rule,
    enum_rule,
    find,
    float_rule,
    get,
    int_rule,
    observe,
    on_change,
    register,
    string_rule,
)
from gamerules.rules.base import Rule, RuleKey, RuleType, create_type
from gamerules.world import Server, get_value, set_value

__version__ = "0.1.0"

__all__ = [
    "BOOLEAN",
    "DOUBLE",
    "FLOAT",
    "INT",
    "STRING",
    "CommandSyntaxError",
    "DuplicateCallbackError",
    "DuplicateRuleError",
    "GameRulesError",
    "InvalidDefaultError",
    "InvalidValueError",
    "NoSuchRuleError",
    "Registry",
    "Rule",
    "RuleKey",
    "RuleKind",
    "RuleType",
    "Server",
    "boolean_rule",
    "create_type",
    "default_registry",
    "double_rule",
    "enum_kind",
    "enum_rule",
    "find",
    "float_rule",
    "get",
    "get_value",
    "int_rule",
    "observe",
    "on_change",
    "register",
    "set_value",
    "string_rule",
]
