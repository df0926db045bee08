"""
Configuration for Per-World Plugins Manager

Defines default paths, catalog sources, and per-world settings defaults.
"""

from pathlib import Path

# Base directory - user config directory, holds config.yaml, logs and world files
BASE_DIR = Path.home() / ".config" / "per-world-plugins"
WORLDS_DIR = BASE_DIR / "worlds"

# Server plugins directory (scanned by the directory catalog)
PLUGINS_DIR = Path.cwd() / "plugins"

# The management plugin itself is never a manageable target
MANAGER_PLUGIN_NAME = "HPWP"

# Jar descriptors, checked in order
PLUGIN_DESCRIPTORS = ("plugin.yml", "paper-plugin.yml")

# Remote plugins directory on Pterodactyl servers
PTERODACTYL_PLUGINS_DIR = "/plugins"

# Catalog sources understood by the CLI
CATALOG_SOURCES = ("directory", "pterodactyl", "static")

# Settings used for worlds that have no file yet
DEFAULT_WORLD_SETTINGS = {
    "check": False,
    "whitelist": False,
}

# Environment variable naming an explicit config file
CONFIG_ENV_VAR = "PER_WORLD_PLUGINS_CONFIG"

# Pterodactyl request timeouts in seconds
API_TIMEOUT = 10
DOWNLOAD_TIMEOUT = 30
