" generic fixtures "
import zipfile

import pytest

from per_world_plugins.catalog import StaticPluginCatalog
from per_world_plugins.controller import ToggleController
from per_world_plugins.settings_store import WorldSettingsStore


def make_jar(path, descriptor=None, descriptor_name="plugin.yml"):
    "Writes a minimal plugin jar, with an optional descriptor body"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        if descriptor is not None:
            archive.writestr(descriptor_name, descriptor)
    return path


@pytest.fixture
def store(tmp_path):
    return WorldSettingsStore(tmp_path / "worlds")


@pytest.fixture
def catalog():
    return StaticPluginCatalog(["A", "B", "C"])


@pytest.fixture
def controller(store, catalog):
    return ToggleController("world", store, catalog)
