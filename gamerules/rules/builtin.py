"""Host built-in rules, loaded from bundled reference data.

Keys are plain (name, kind) pairs, so the constants here address the
built-in rules in any catalogue seeded by builtin_catalogue().
"""

from pathlib import Path

import yaml

from gamerules.catalogue import InMemoryCatalogue
from gamerules.kinds import BOOLEAN, INT, kind_for_label
from gamerules.rules.base import RuleKey, create_type

_DATA_DIR = Path(__file__).parent.parent / "data"

with open(_DATA_DIR / "builtin_rules.yaml") as f:
    _BUILTIN_DATA: list[dict] = yaml.safe_load(f)

BUILTIN_KEYS: dict[str, RuleKey] = {
    entry["name"]: RuleKey(entry["name"], kind_for_label(entry["kind"])) for entry in _BUILTIN_DATA
}

DO_FIRE_TICK: RuleKey[bool] = RuleKey("doFireTick", BOOLEAN)
MOB_GRIEFING: RuleKey[bool] = RuleKey("mobGriefing", BOOLEAN)
KEEP_INVENTORY: RuleKey[bool] = RuleKey("keepInventory", BOOLEAN)
DO_DAYLIGHT_CYCLE: RuleKey[bool] = RuleKey("doDaylightCycle", BOOLEAN)
RANDOM_TICK_SPEED: RuleKey[int] = RuleKey("randomTickSpeed", INT)
SPAWN_RADIUS: RuleKey[int] = RuleKey("spawnRadius", INT)
MAX_ENTITY_CRAMMING: RuleKey[int] = RuleKey("maxEntityCramming", INT)


def builtin_catalogue() -> InMemoryCatalogue:
    """A fresh catalogue seeded with every built-in rule.

    Each call builds new rule types, so observers added to one catalogue
    never leak into another.
    """
    entries = []
    for entry in _BUILTIN_DATA:
        key = BUILTIN_KEYS[entry["name"]]
        entries.append((key.name, create_type(key.kind, entry.get("default"))))
    return InMemoryCatalogue(entries)
