"""
World Settings Store

Loads and saves per-world settings as one YAML file per world.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .config import DEFAULT_WORLD_SETTINGS, WORLDS_DIR
from .world_settings import InvalidSettings, WorldSettings

logger = logging.getLogger(__name__)


class StoreUnavailable(Exception):
    """Raised when a world file cannot be read or written"""

    def __init__(self, world_name: str, path: Path, reason: str):
        super().__init__(f"Settings for world '{world_name}' unavailable ({path}): {reason}")
        self.world_name = world_name
        self.path = path
        self.reason = reason


class WorldSettingsStore:
    """Durable copy of every world's settings, keyed by world name"""

    def __init__(self, worlds_dir: Optional[Path] = None, defaults: Optional[Dict] = None):
        """
        Args:
            worlds_dir: Directory holding <world>.yml files
            defaults: Settings used for worlds without a file
        """
        self.worlds_dir = Path(worlds_dir) if worlds_dir else WORLDS_DIR
        self.defaults = dict(DEFAULT_WORLD_SETTINGS)
        if defaults:
            self.defaults.update(defaults)

    def path_for(self, world_name: str) -> Path:
        """Get the YAML file path for a world"""
        if not world_name or world_name in (".", "..") or "/" in world_name or "\\" in world_name:
            raise ValueError(f"Invalid world name: {world_name!r}")
        return self.worlds_dir / f"{world_name}.yml"

    def default_settings(self) -> WorldSettings:
        return WorldSettings.from_dict({}, self.defaults)

    def load(self, world_name: str) -> WorldSettings:
        """
        Load a world's settings

        Args:
            world_name: World identifier

        Returns:
            Stored settings, or defaults if the world has no file yet

        Raises:
            StoreUnavailable: File unreadable or its contents invalid
        """
        path = self.path_for(world_name)

        if not path.exists():
            logger.info(f"No settings file for world '{world_name}', using defaults")
            return self.default_settings()

        try:
            # Binary mode lets the YAML reader report undecodable bytes
            with open(path, 'rb') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing settings for world '{world_name}': {e}")
            raise StoreUnavailable(world_name, path, f"invalid YAML: {e}") from e
        except OSError as e:
            logger.error(f"Error reading settings for world '{world_name}': {e}")
            raise StoreUnavailable(world_name, path, str(e)) from e

        if not data:
            logger.warning(f"Settings file {path} is empty, using defaults")
            return self.default_settings()

        if not isinstance(data, dict):
            raise StoreUnavailable(world_name, path, "expected a mapping at top level")

        try:
            return WorldSettings.from_dict(data, self.defaults)
        except InvalidSettings as e:
            logger.error(f"Invalid settings for world '{world_name}': {e}")
            raise StoreUnavailable(world_name, path, str(e)) from e

    def save(self, world_name: str, settings: WorldSettings):
        """
        Write a world's settings to disk

        Args:
            world_name: World identifier
            settings: Settings to persist

        Raises:
            StoreUnavailable: Directory or file not writable
        """
        path = self.path_for(world_name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"✗ Failed to save settings for world '{world_name}': {e}")
            raise StoreUnavailable(world_name, path, str(e)) from e

        logger.debug("Settings saved: %s", path)

    def list_worlds(self) -> List[str]:
        """Names of worlds that have a settings file"""
        if not self.worlds_dir.is_dir():
            return []
        return sorted(path.stem for path in self.worlds_dir.glob("*.yml"))
