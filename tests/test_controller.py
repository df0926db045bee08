"""Tests for the per-world toggle controller."""

import pytest

from per_world_plugins.catalog import StaticPluginCatalog
from per_world_plugins.controller import ToggleController
from per_world_plugins.settings_store import StoreUnavailable, WorldSettingsStore
from per_world_plugins.world_settings import WorldSettings


class FailingStore(WorldSettingsStore):
    """Store whose writes always fail."""

    def save(self, world_name, settings):
        raise StoreUnavailable(world_name, self.path_for(world_name), "disk full")


class TestSinglePlugin:
    """Tests for set_plugin_enabled / is_plugin_enabled."""

    def test_blacklist_disable_adds(self, controller):
        """Disabling under a blacklist lists the plugin."""
        controller.set_plugin_enabled("Foo", False)

        assert controller.settings.disabled_plugins == {"Foo"}
        assert controller.is_plugin_enabled("Foo") is False

    def test_whitelist_enable_adds(self, controller):
        """Enabling under a whitelist lists the plugin."""
        controller.set_mode(True)
        controller.set_plugin_enabled("Foo", True)

        assert controller.settings.disabled_plugins == {"Foo"}
        assert controller.is_plugin_enabled("Foo") is True

    def test_whitelist_disable_removes(self, controller):
        controller.set_mode(True)
        controller.set_plugin_enabled("Foo", True)
        controller.set_plugin_enabled("Foo", False)

        assert controller.settings.disabled_plugins == set()

    @pytest.mark.parametrize("whitelist", [False, True])
    @pytest.mark.parametrize("enabled", [False, True])
    def test_query_matches_last_toggle(self, controller, whitelist, enabled):
        """The effective state follows the last toggle in either mode."""
        controller.set_mode(whitelist)
        controller.set_plugin_enabled("Foo", enabled)

        assert controller.is_plugin_enabled("Foo") is enabled

    def test_change_is_written_through(self, controller, store):
        controller.set_plugin_enabled("Foo", False)

        assert store.load("world").disabled_plugins == {"Foo"}


class TestBulk:
    """Tests for set_all_enabled."""

    def test_disable_all_blacklist(self, controller):
        controller.set_all_enabled(False)

        assert controller.settings.disabled_plugins == {"A", "B", "C"}

    def test_enable_then_disable_all(self, controller):
        controller.set_all_enabled(True)
        controller.set_all_enabled(False)

        assert all(not controller.is_plugin_enabled(name) for name in "ABC")

    def test_disable_all_idempotent(self, controller):
        controller.set_all_enabled(False)
        once = set(controller.settings.disabled_plugins)
        controller.set_all_enabled(False)

        assert controller.settings.disabled_plugins == once

    def test_whitelist_disable_all_empties_list(self, controller):
        controller.set_mode(True)
        controller.set_all_enabled(True)
        assert controller.settings.disabled_plugins == {"A", "B", "C"}

        controller.set_all_enabled(False)
        assert controller.settings.disabled_plugins == set()

    def test_stale_names_are_kept(self, controller):
        """Names no longer installed are never pruned."""
        controller.set_plugin_enabled("Removed", False)
        controller.set_all_enabled(True)

        assert controller.settings.disabled_plugins == {"Removed"}

    def test_catalog_is_fetched_on_each_call(self, store):
        catalog = StaticPluginCatalog(["A"])
        controller = ToggleController("world", store, catalog)

        controller.set_all_enabled(False)
        catalog.plugin_names.append("B")
        controller.set_all_enabled(False)

        assert controller.settings.disabled_plugins == {"A", "B"}

    def test_single_save(self, store, catalog, monkeypatch):
        controller = ToggleController("world", store, catalog)
        calls = []
        monkeypatch.setattr(store, "save", lambda *args: calls.append(args))

        controller.set_all_enabled(False)

        assert len(calls) == 1


class TestModeAndCheck:
    """Tests for set_mode and the check flag."""

    def test_mode_switch_reinterprets(self, controller):
        """Switching to a whitelist flips the listed plugin without touching the set."""
        controller.set_plugin_enabled("A", False)
        assert controller.is_plugin_enabled("A") is False

        controller.set_mode(True)

        assert controller.settings.disabled_plugins == {"A"}
        assert controller.is_plugin_enabled("A") is True
        assert controller.is_plugin_enabled("B") is False

    def test_check_toggles(self, controller, store):
        controller.enable_check()
        assert store.load("world").check is True

        controller.disable_check()
        assert store.load("world").check is False

    def test_get_state_is_a_snapshot(self, controller):
        state = controller.get_state()
        state.disabled_plugins.add("X")

        assert controller.settings.disabled_plugins == set()
        assert isinstance(state, WorldSettings)


class TestSaveFailure:
    """A failed save surfaces and keeps the in-memory change."""

    def test_failure_propagates_without_rollback(self, tmp_path, catalog):
        controller = ToggleController("world", FailingStore(tmp_path), catalog)

        with pytest.raises(StoreUnavailable):
            controller.set_plugin_enabled("A", False)

        assert controller.settings.disabled_plugins == {"A"}
