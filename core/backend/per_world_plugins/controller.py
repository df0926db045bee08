"""
Toggle Controller

Applies per-world plugin toggles and writes every change through to the store.
"""

import logging

from .catalog import PluginCatalog
from .settings_store import WorldSettingsStore
from .world_settings import WorldSettings

logger = logging.getLogger(__name__)


class ToggleController:
    """Mutates one world's settings in response to user intents"""

    def __init__(self, world_name: str, store: WorldSettingsStore, catalog: PluginCatalog):
        """
        Args:
            world_name: World whose settings are edited
            store: Durable settings store
            catalog: Installed plugins, queried on every bulk toggle
        """
        self.world_name = world_name
        self.store = store
        self.catalog = catalog
        self.settings = store.load(world_name)

    def save(self):
        """Persist the in-memory settings, StoreUnavailable propagates"""
        self.store.save(self.world_name, self.settings)

    def get_state(self) -> WorldSettings:
        return self.settings.copy()

    def enable_check(self):
        self.settings.check = True
        logger.info(f"Checking enabled for world '{self.world_name}'")
        self.save()

    def disable_check(self):
        self.settings.check = False
        logger.info(f"Checking disabled for world '{self.world_name}'")
        self.save()

    def set_mode(self, whitelist: bool):
        """Switch list mode, the listed plugins are kept as they are"""
        self.settings.whitelist = whitelist
        logger.info(f"World '{self.world_name}' now uses a "
                    f"{'whitelist' if whitelist else 'blacklist'}")
        self.save()

    def _apply(self, name: str, enabled: bool):
        # Listed means allowed under a whitelist and disallowed under a blacklist
        if enabled == self.settings.whitelist:
            self.settings.disabled_plugins.add(name)
        else:
            self.settings.disabled_plugins.discard(name)

    def set_plugin_enabled(self, name: str, enabled: bool):
        self._apply(name, enabled)
        logger.info(f"{'Enabled' if enabled else 'Disabled'} {name} in world '{self.world_name}'")
        self.save()

    def set_all_enabled(self, enabled: bool):
        """Apply the same state to every installed plugin, saving once"""
        names = self.catalog.names()
        for name in names:
            self._apply(name, enabled)

        logger.info(f"{'Enabled' if enabled else 'Disabled'} {len(names)} plugin(s) "
                    f"in world '{self.world_name}'")
        self.save()

    def is_plugin_enabled(self, name: str) -> bool:
        return self.settings.plugin_enabled(name)
