"""
Per-World Settings

In-memory record of one world's plugin restrictions.
"""

from typing import Dict, Iterable, Optional


class InvalidSettings(ValueError):
    """Raised when a world file holds values of the wrong type"""


class WorldSettings:
    """Check flag, list mode and listed plugins for a single world"""

    def __init__(self, check: bool = False, whitelist: bool = False,
                 disabled_plugins: Optional[Iterable[str]] = None):
        """
        Args:
            check: Whether per-world restrictions are enforced
            whitelist: True if listed plugins are the allowed ones
            disabled_plugins: The listed plugin names
        """
        self.check = check
        self.whitelist = whitelist
        self.disabled_plugins = set(disabled_plugins or ())

    def plugin_enabled(self, name: str) -> bool:
        """Effective state of a plugin under the current list mode"""
        if self.whitelist:
            return name in self.disabled_plugins
        return name not in self.disabled_plugins

    def copy(self) -> "WorldSettings":
        return WorldSettings(self.check, self.whitelist, self.disabled_plugins)

    def to_dict(self) -> Dict:
        """Mapping written to the world's YAML file"""
        return {
            "check": self.check,
            "whitelist": self.whitelist,
            "disabled_plugins": sorted(self.disabled_plugins),
        }

    @classmethod
    def from_dict(cls, data: Dict, defaults: Optional[Dict] = None) -> "WorldSettings":
        """
        Build settings from a YAML mapping

        Args:
            data: Mapping loaded from a world file
            defaults: Values used for missing keys

        Returns:
            WorldSettings instance

        Raises:
            InvalidSettings: A value has the wrong type
        """
        defaults = defaults or {}

        flags = {}
        for key in ("check", "whitelist"):
            value = data.get(key, defaults.get(key, False))
            if not isinstance(value, bool):
                raise InvalidSettings(f"'{key}' must be true or false, got {value!r}")
            flags[key] = value

        disabled = data.get("disabled_plugins")
        if disabled is None:
            disabled = []
        elif not isinstance(disabled, list):
            raise InvalidSettings(f"'disabled_plugins' must be a list, got {disabled!r}")

        for name in disabled:
            if isinstance(name, (dict, list)):
                raise InvalidSettings(f"Invalid plugin name in 'disabled_plugins': {name!r}")

        return cls(
            check=flags["check"],
            whitelist=flags["whitelist"],
            disabled_plugins=[str(name) for name in disabled],
        )

    def __eq__(self, other):
        if not isinstance(other, WorldSettings):
            return NotImplemented
        return (self.check == other.check
                and self.whitelist == other.whitelist
                and self.disabled_plugins == other.disabled_plugins)

    def __repr__(self):
        mode = "whitelist" if self.whitelist else "blacklist"
        return (f"WorldSettings(check={self.check}, mode={mode}, "
                f"disabled_plugins={sorted(self.disabled_plugins)})")
