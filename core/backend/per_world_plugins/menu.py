"""
World Menu

Presentation model of the per-world plugins menu: what to display for a world
and the actions each menu button performs.
"""

import logging
from typing import Dict, List, Optional

from .catalog import ExcludingPluginCatalog, PluginCatalog
from .config import MANAGER_PLUGIN_NAME
from .controller import ToggleController
from .settings_store import WorldSettingsStore
from .world_settings import WorldSettings

logger = logging.getLogger(__name__)


class WorldMenu:
    """Menu for one world, backed by a ToggleController"""

    def __init__(self, controller: ToggleController):
        self.controller = controller

    @property
    def world_name(self) -> str:
        return self.controller.world_name

    def entries(self) -> List[Dict]:
        """
        Plugin rows to display, re-read from the catalog on every call

        Returns:
            List of {name, enabled} dicts sorted by plugin name
        """
        settings = self.controller.settings
        return [
            {'name': name, 'enabled': settings.plugin_enabled(name)}
            for name in self.controller.catalog.names()
        ]

    def check_state(self) -> str:
        return "enabled" if self.controller.settings.check else "disabled"

    def mode_state(self) -> str:
        return "whitelist" if self.controller.settings.whitelist else "blacklist"

    def toggle_check(self):
        if self.controller.settings.check:
            self.controller.disable_check()
        else:
            self.controller.enable_check()

    def toggle_mode(self):
        self.controller.set_mode(not self.controller.settings.whitelist)

    def toggle_plugin(self, name: str):
        """
        Flip a single plugin's effective state

        Raises:
            KeyError: Plugin not installed or not manageable
        """
        if name not in self.controller.catalog.names():
            raise KeyError(name)

        self.controller.set_plugin_enabled(name, not self.controller.is_plugin_enabled(name))

    def set_plugin(self, name: str, enabled: bool):
        if name not in self.controller.catalog.names():
            raise KeyError(name)

        self.controller.set_plugin_enabled(name, enabled)

    def enable_all(self):
        self.controller.set_all_enabled(True)

    def disable_all(self):
        self.controller.set_all_enabled(False)


class WorldMenuManager:
    """Opens one menu per world on first use"""

    def __init__(self, store: WorldSettingsStore, catalog: PluginCatalog,
                 manager_plugin_name: Optional[str] = MANAGER_PLUGIN_NAME):
        """
        Args:
            store: Settings store shared by all worlds
            catalog: Installed plugins
            manager_plugin_name: Name of the managing plugin, never listed
        """
        self.store = store
        excluded = [manager_plugin_name] if manager_plugin_name else []
        self.catalog = ExcludingPluginCatalog(catalog, excluded)
        self.menus: Dict[str, WorldMenu] = {}

    def get_menu(self, world_name: str) -> WorldMenu:
        if world_name not in self.menus:
            logger.debug(f"Opening menu for world '{world_name}'")
            controller = ToggleController(world_name, self.store, self.catalog)
            self.menus[world_name] = WorldMenu(controller)
        return self.menus[world_name]

    def get_state(self, world_name: str) -> WorldSettings:
        return self.get_menu(world_name).controller.get_state()

    def close(self, world_name: str):
        """Drop the in-memory copy, the store keeps the durable one"""
        self.menus.pop(world_name, None)
