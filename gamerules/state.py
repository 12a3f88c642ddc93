"""Persistence of a server's rule values as a JSON file of encoded strings."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from gamerules.models import SavedRules
from gamerules.world import Server

logger = logging.getLogger(__name__)

_DEFAULT_STATE_PATH = Path.home() / ".gamerules" / "rules.json"


class RuleState:
    """Saves and loads the rule values of one server."""

    def __init__(self, state_path: Optional[Path] = None) -> None:
        self.state_path = state_path or _DEFAULT_STATE_PATH

    def save(self, server: Server) -> SavedRules:
        """Write every rule of `server` to the state file."""
        saved = SavedRules(server=server.name, rules=server.game_rules.snapshot())
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        self.state_path.write_text(saved.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Rule state saved: %s", self.state_path)
        return saved

    def read(self) -> Optional[SavedRules]:
        """Parse the state file. Returns None if missing or corrupted."""
        if not self.state_path.exists():
            return None
        try:
            raw = json.loads(self.state_path.read_text(encoding="utf-8"))
            return SavedRules.model_validate(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError, OSError) as exc:
            logger.warning("Failed to load rule state %s: %s", self.state_path, exc)
            return None

    def load(self, server: Server) -> bool:
        """Apply saved values to `server` without firing change callbacks.

        A missing or corrupted file leaves every rule at its default.
        """
        saved = self.read()
        if saved is None:
            return False
        count = server.game_rules.load(saved.rules)
        logger.debug("Loaded %d rules into %s", count, server.name)
        return True
