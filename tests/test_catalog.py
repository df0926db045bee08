"""Tests for plugin catalogs."""

from unittest.mock import Mock

import io
import zipfile

import requests

from per_world_plugins.catalog import (
    DirectoryPluginCatalog,
    ExcludingPluginCatalog,
    PterodactylPluginCatalog,
    SnapshotPluginCatalog,
    StaticPluginCatalog,
    read_plugin_descriptor,
)

from .conftest import make_jar


def jar_bytes(descriptor):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("plugin.yml", descriptor)
    return buffer.getvalue()


class TestStaticCatalog:

    def test_sorted_and_unique(self):
        catalog = StaticPluginCatalog(["b", "a", "b"])

        assert catalog.names() == ["a", "b"]


class TestDirectoryCatalog:

    def test_reads_descriptors(self, tmp_path):
        make_jar(tmp_path / "worldedit-7.3.0.jar", "name: WorldEdit\nversion: 7.3.0\nmain: x.Y\n")
        make_jar(tmp_path / "paper-thing.jar", "name: Alpha\nversion: 1\n", "paper-plugin.yml")

        plugins = DirectoryPluginCatalog(tmp_path).list_plugins()

        assert plugins == [
            {"name": "Alpha", "version": "1", "file": "paper-thing.jar"},
            {"name": "WorldEdit", "version": "7.3.0", "file": "worldedit-7.3.0.jar"},
        ]

    def test_falls_back_to_stem(self, tmp_path):
        make_jar(tmp_path / "NoDescriptor.jar")
        (tmp_path / "Broken.jar").write_text("not a zip")
        (tmp_path / "readme.txt").write_text("ignored")

        assert DirectoryPluginCatalog(tmp_path).names() == ["Broken", "NoDescriptor"]

    def test_missing_directory(self, tmp_path):
        assert DirectoryPluginCatalog(tmp_path / "missing").list_plugins() == []

    def test_rescans_on_each_call(self, tmp_path):
        catalog = DirectoryPluginCatalog(tmp_path)
        assert catalog.names() == []

        make_jar(tmp_path / "a.jar", "name: A\n")
        assert catalog.names() == ["A"]


class TestDescriptor:

    def test_descriptor_without_name(self, tmp_path):
        jar = make_jar(tmp_path / "x.jar", "version: 1\n")

        assert read_plugin_descriptor(jar) is None


class TestPterodactylCatalog:

    def test_lists_remote_jars(self):
        client = Mock()
        client.list_files.return_value = [
            {"name": "LuckPerms-Bukkit-5.4.jar", "is_file": True},
            {"name": "LuckPerms", "is_file": False},
            {"name": "notes.txt", "is_file": True},
            {"name": "broken.jar", "is_file": True},
        ]

        def download(server_id, path):
            if path.endswith("broken.jar"):
                raise requests.RequestException("boom")
            return jar_bytes("name: LuckPerms\nversion: 5.4\n")

        client.download_file.side_effect = download

        catalog = PterodactylPluginCatalog(client, "abc123")
        plugins = catalog.list_plugins()

        client.list_files.assert_called_once_with("abc123", "/plugins")
        assert plugins == [
            {"name": "LuckPerms", "version": "5.4", "file": "LuckPerms-Bukkit-5.4.jar"},
            {"name": "broken", "version": None, "file": "broken.jar"},
        ]


class TestExcludingCatalog:

    def test_excludes_names(self):
        catalog = ExcludingPluginCatalog(StaticPluginCatalog(["HPWP", "A"]), ["HPWP"])

        assert catalog.names() == ["A"]


class TestSnapshotCatalog:

    def test_reads_once_until_refreshed(self):
        source = StaticPluginCatalog(["A"])
        catalog = SnapshotPluginCatalog(source)

        assert catalog.names() == ["A"]
        source.plugin_names.append("B")
        assert catalog.names() == ["A"]

        catalog.refresh()
        assert catalog.names() == ["A", "B"]

    def test_new_snapshot_reads_again(self):
        source = StaticPluginCatalog(["A"])
        SnapshotPluginCatalog(source).names()
        source.plugin_names.append("B")

        assert SnapshotPluginCatalog(source).names() == ["A", "B"]

    def test_entries_are_copies(self):
        catalog = SnapshotPluginCatalog(StaticPluginCatalog(["A"]))
        catalog.list_plugins()[0]["name"] = "changed"

        assert catalog.names() == ["A"]
