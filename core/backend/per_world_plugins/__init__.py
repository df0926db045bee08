"""
Per-World Plugins Manager

Toggle, per game world, whether per-world plugin restrictions are enforced
and which server plugins are enabled there (blacklist or whitelist).

Version: 1.0.0
"""

__version__ = "1.0.0"
__description__ = "Per-world plugin toggles for Minecraft servers"

from .controller import ToggleController
from .settings_store import StoreUnavailable, WorldSettingsStore
from .world_settings import WorldSettings

__all__ = [
    "ToggleController",
    "StoreUnavailable",
    "WorldSettings",
    "WorldSettingsStore",
]
