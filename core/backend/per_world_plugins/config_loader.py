"""
Configuration Loader

Loads and validates configuration from YAML files.
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional

import yaml

from .config import (
    BASE_DIR,
    CATALOG_SOURCES,
    CONFIG_ENV_VAR,
    DEFAULT_WORLD_SETTINGS,
    MANAGER_PLUGIN_NAME,
    PLUGINS_DIR,
    WORLDS_DIR,
)

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_PATTERN = re.compile(r'\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}')

DEFAULT_CONFIG = {
    'manager_plugin': MANAGER_PLUGIN_NAME,
    'paths': {
        'worlds_dir': str(WORLDS_DIR),
        'plugins_dir': str(PLUGINS_DIR),
    },
    'catalog': {
        'source': 'directory',
        'plugins': [],
        'server': None,
    },
    'pterodactyl': {},
    'defaults': dict(DEFAULT_WORLD_SETTINGS),
}


def get_config_paths() -> list[Path]:
    """
    Config files to try, first existing one wins

    PER_WORLD_PLUGINS_CONFIG points at an explicit file and takes priority
    over the user config directory and the working directory.
    """
    paths = [BASE_DIR / "config.yaml", Path.cwd() / "config.yaml"]

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        paths.insert(0, Path(override).expanduser())

    return paths


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load configuration from YAML file

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Configuration dict with paths, catalog, pterodactyl, defaults
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Determine which config file to use
    if config_path:
        config_files = [config_path]
    else:
        config_files = get_config_paths()

    loaded_from = None
    for path in config_files:
        if path.exists():
            loaded_from = path
            break

    if not loaded_from:
        logger.info("No config file found, using defaults")
        return config

    logger.info(f"Loading configuration from: {loaded_from}")

    try:
        with open(loaded_from, 'r') as f:
            user_config = yaml.safe_load(f)

        if not user_config:
            logger.warning(f"Config file {loaded_from} is empty")
            return config

        # Process environment variable substitution
        user_config = substitute_env_vars(user_config)

        # Merge user config with defaults, sections are merged key by key
        if 'manager_plugin' in user_config:
            config['manager_plugin'] = user_config['manager_plugin']

        for section in ('paths', 'catalog', 'pterodactyl', 'defaults'):
            if isinstance(user_config.get(section), dict):
                config[section].update(user_config[section])

        logger.info(f"✓ Catalog source: {config['catalog']['source']}")

        return config

    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config: {e}")
        logger.info("Falling back to defaults")
        return config
    except OSError as e:
        logger.error(f"Error loading config: {e}")
        logger.info("Falling back to defaults")
        return config


def substitute_env_vars(value):
    """
    Expand ${VAR} and ${VAR:-default} in every string of a config tree

    Args:
        value: Config dict, list or scalar

    Returns:
        Copy of the tree with environment variables expanded
    """
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    if isinstance(value, str):
        return ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), value)
    return value


def validate_config(config: Dict) -> tuple[bool, list[str]]:
    """
    Validate configuration structure

    Args:
        config: Configuration dict to validate

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []

    paths = config.get('paths', {})
    if not paths.get('worlds_dir'):
        errors.append("Config must define 'paths.worlds_dir'")

    catalog = config.get('catalog', {})
    source = catalog.get('source')

    if source not in CATALOG_SOURCES:
        errors.append(
            f"Unknown catalog source '{source}' (expected one of: {', '.join(CATALOG_SOURCES)})"
        )

    if source == 'directory' and not paths.get('plugins_dir'):
        errors.append("Directory catalog requires 'paths.plugins_dir'")

    if source == 'static' and not isinstance(catalog.get('plugins'), list):
        errors.append("Static catalog requires a 'catalog.plugins' list")

    if source == 'pterodactyl':
        if not catalog.get('server'):
            errors.append("Pterodactyl catalog requires 'catalog.server'")

        ptero = config.get('pterodactyl') or {}

        if 'panel_url' not in ptero:
            errors.append("Pterodactyl config missing 'panel_url'")

        if not ptero.get('api_key'):
            errors.append("Pterodactyl config missing 'api_key'")

    defaults = config.get('defaults', {})
    for key in ('check', 'whitelist'):
        if key in defaults and not isinstance(defaults[key], bool):
            errors.append(f"Default '{key}' must be true or false")

    is_valid = len(errors) == 0
    return is_valid, errors


def save_config(config: Dict, config_path: Optional[Path] = None) -> bool:
    """
    Save configuration to YAML file

    Args:
        config: Configuration dict to save
        config_path: Optional path to save to (defaults to user config)

    Returns:
        True if saved successfully
    """
    if not config_path:
        # Default to user config directory
        config_path = BASE_DIR / "config.yaml"

    try:
        # Create directory if it doesn't exist
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

        logger.info(f"✓ Configuration saved to: {config_path}")
        return True

    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False
