"""
Plugin Catalogs

Enumerate the plugins currently installed on a server. Every catalog returns
a fresh snapshot on each call, sorted by plugin name.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, List, Optional, Union

import requests
import yaml

from .config import PLUGIN_DESCRIPTORS, PLUGINS_DIR, PTERODACTYL_PLUGINS_DIR
from .pterodactyl import PterodactylClient

logger = logging.getLogger(__name__)


def read_plugin_descriptor(jar: Union[Path, BinaryIO]) -> Optional[Dict]:
    """
    Read name and version from a plugin jar's descriptor

    Args:
        jar: Path or binary file object of the jar

    Returns:
        Dict with name/version, or None if the jar has no usable descriptor
    """
    with zipfile.ZipFile(jar) as archive:
        members = set(archive.namelist())

        for descriptor in PLUGIN_DESCRIPTORS:
            if descriptor not in members:
                continue

            data = yaml.safe_load(archive.read(descriptor))
            if isinstance(data, dict) and data.get('name'):
                version = data.get('version')
                return {
                    'name': str(data['name']),
                    'version': str(version) if version is not None else None,
                }

    return None


def _sorted(plugins: Iterable[Dict]) -> List[Dict]:
    return sorted(plugins, key=lambda plugin: plugin['name'])


class PluginCatalog:
    """Source of the currently loaded plugins"""

    def list_plugins(self) -> List[Dict]:
        """
        Snapshot of installed plugins

        Returns:
            List of {name, version, file} dicts sorted by name
        """
        raise NotImplementedError

    def names(self) -> List[str]:
        return [plugin['name'] for plugin in self.list_plugins()]


class StaticPluginCatalog(PluginCatalog):
    """Fixed list of plugin names"""

    def __init__(self, names: Iterable[str] = ()):
        self.plugin_names = list(names)

    def list_plugins(self) -> List[Dict]:
        return _sorted({'name': name, 'version': None, 'file': None}
                       for name in set(self.plugin_names))


class DirectoryPluginCatalog(PluginCatalog):
    """Plugins found as jars in a local server's plugins directory"""

    def __init__(self, plugins_dir: Optional[Path] = None):
        self.plugins_dir = Path(plugins_dir) if plugins_dir else PLUGINS_DIR

    def list_plugins(self) -> List[Dict]:
        if not self.plugins_dir.is_dir():
            logger.warning(f"Plugins directory not found: {self.plugins_dir}")
            return []

        plugins = {}
        for jar_path in self.plugins_dir.glob("*.jar"):
            if not jar_path.is_file():
                continue

            info = None
            try:
                info = read_plugin_descriptor(jar_path)
            except (OSError, zipfile.BadZipFile, yaml.YAMLError) as e:
                logger.warning(f"⚠ Could not read descriptor from {jar_path.name}: {e}")

            if not info:
                info = {'name': jar_path.stem, 'version': None}

            info['file'] = jar_path.name
            plugins.setdefault(info['name'], info)

        return _sorted(plugins.values())


class PterodactylPluginCatalog(PluginCatalog):
    """Plugins installed on a remote server managed by a Pterodactyl panel"""

    def __init__(self, client: PterodactylClient, server_id: str,
                 directory: str = PTERODACTYL_PLUGINS_DIR):
        """
        Args:
            client: Authenticated panel client
            server_id: Server identifier
            directory: Remote plugins directory
        """
        self.client = client
        self.server_id = server_id
        self.directory = directory.rstrip('/')

    def list_plugins(self) -> List[Dict]:
        files = self.client.list_files(self.server_id, self.directory or '/')

        plugins = {}
        for entry in files:
            filename = entry.get('name', '')
            if not entry.get('is_file', True) or not filename.endswith('.jar'):
                continue

            remote_path = f"{self.directory}/{filename}"
            info = None
            try:
                content = self.client.download_file(self.server_id, remote_path)
                info = read_plugin_descriptor(io.BytesIO(content))
            except (requests.RequestException, zipfile.BadZipFile, yaml.YAMLError) as e:
                logger.warning(f"⚠ Could not read descriptor from {remote_path}: {e}")

            if not info:
                info = {'name': Path(filename).stem, 'version': None}

            info['file'] = filename
            plugins.setdefault(info['name'], info)

        logger.info(f"Found {len(plugins)} plugin(s) on server {self.server_id}")
        return _sorted(plugins.values())


class ExcludingPluginCatalog(PluginCatalog):
    """Another catalog with some plugin names removed"""

    def __init__(self, catalog: PluginCatalog, excluded: Iterable[str]):
        self.catalog = catalog
        self.excluded = set(excluded)

    def list_plugins(self) -> List[Dict]:
        return [plugin for plugin in self.catalog.list_plugins()
                if plugin['name'] not in self.excluded]


class SnapshotPluginCatalog(PluginCatalog):
    """
    Another catalog read once and then reused

    Meant for a single command run, where repeated lookups would otherwise
    list (or download) the plugins again. A new instance, or refresh(),
    reads the wrapped catalog again.
    """

    def __init__(self, catalog: PluginCatalog):
        self.catalog = catalog
        self.plugins: Optional[List[Dict]] = None

    def refresh(self):
        self.plugins = None

    def list_plugins(self) -> List[Dict]:
        if self.plugins is None:
            self.plugins = self.catalog.list_plugins()
        return [dict(plugin) for plugin in self.plugins]
