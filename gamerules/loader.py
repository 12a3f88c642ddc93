"""Extension loading: import modules that register rules at startup.

An extension is any importable module. Importing it may register rules
at module level; if it defines `register(registry)`, that is called once
with the target registry. Every module is loaded at most once per registry.
"""

import importlib
import logging
from typing import Iterable, Optional

from gamerules.errors import ExtensionLoadError
from gamerules.registry import Registry, default_registry

logger = logging.getLogger(__name__)


def load_extension(module_name: str, registry: Optional[Registry] = None) -> bool:
    """Import one extension and let it register its rules.

    Returns False if the module was already loaded into this registry.

    Raises:
        ExtensionLoadError: The import or the module's register() failed.
    """
    registry = registry if registry is not None else default_registry
    if module_name in registry.extensions:
        logger.debug("Extension %s already loaded", module_name)
        return False

    try:
        module = importlib.import_module(module_name)
        hook = getattr(module, "register", None)
        if callable(hook):
            hook(registry)
    except Exception as exc:
        raise ExtensionLoadError(module_name, exc) from exc

    registry.extensions.add(module_name)
    logger.info("Loaded extension %s", module_name)
    return True


def load_extensions(module_names: Iterable[str], registry: Optional[Registry] = None) -> list[str]:
    """Load extensions in order; returns the names newly loaded."""
    return [name for name in module_names if load_extension(name, registry)]
