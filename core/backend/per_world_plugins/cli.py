"""
Command-Line Interface

Entry point for the per-world-plugins CLI tool.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from . import __version__
from .catalog import (
    DirectoryPluginCatalog,
    PluginCatalog,
    PterodactylPluginCatalog,
    SnapshotPluginCatalog,
    StaticPluginCatalog,
)
from .config import BASE_DIR
from .config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config
from .menu import WorldMenu, WorldMenuManager
from .pterodactyl import PterodactylClient
from .settings_store import StoreUnavailable, WorldSettingsStore

logger = logging.getLogger(__name__)


# Logging setup
def setup_logging(log_dir: Path = BASE_DIR):
    """Configure logging for CLI"""
    handlers = [logging.StreamHandler()]

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"per-world-plugins-{datetime.now().strftime('%Y%m%d%H%M%S')}.log"
        handlers.append(logging.FileHandler(log_file))
    except OSError as e:
        print(f"Could not create log file in {log_dir}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def build_catalog(config: dict) -> PluginCatalog:
    """
    Create the plugin catalog selected in the config

    Args:
        config: Validated configuration dict

    Returns:
        PluginCatalog instance
    """
    catalog = config['catalog']
    source = catalog['source']

    if source == 'static':
        return StaticPluginCatalog(catalog.get('plugins') or [])

    if source == 'pterodactyl':
        ptero = config['pterodactyl']
        client = PterodactylClient(ptero['panel_url'], ptero['api_key'])
        return PterodactylPluginCatalog(client, catalog['server'])

    return DirectoryPluginCatalog(Path(config['paths']['plugins_dir']).expanduser())


def show_status(menu: WorldMenu):
    """Print the menu of a world"""
    print(f"World: {menu.world_name}")
    print(f"  Checking: {menu.check_state()}")
    print(f"  Mode:     {menu.mode_state()}")
    print("")

    entries = menu.entries()
    if not entries:
        print("  No plugins found")
        return

    for entry in entries:
        marker = "✓" if entry['enabled'] else "✗"
        print(f"  {marker} {entry['name']}")


def run_world_actions(menu: WorldMenu, args) -> int:
    """
    Apply the requested actions to a world, in a fixed order

    Args:
        menu: Menu of the target world
        args: Parsed CLI arguments

    Returns:
        Exit code (0 = success)
    """
    installed = set(menu.controller.catalog.names())
    unknown = [name for name in (args.enable or []) + (args.disable or []) if name not in installed]
    if unknown:
        for name in unknown:
            logger.error(f"✗ Unknown plugin: {name}")
        logger.error("  No changes were made")
        return 1

    if args.enable_check:
        menu.controller.enable_check()
    elif args.disable_check:
        menu.controller.disable_check()

    if args.whitelist:
        menu.controller.set_mode(True)
    elif args.blacklist:
        menu.controller.set_mode(False)

    if args.enable_all:
        menu.enable_all()
    elif args.disable_all:
        menu.disable_all()

    for enabled, names in ((True, args.enable or []), (False, args.disable or [])):
        for name in names:
            menu.set_plugin(name, enabled)

    return 0


def run_init(config_path: Path = None) -> int:
    """Write a default config file"""
    if save_config(DEFAULT_CONFIG, config_path):
        logger.info("\nNext steps:")
        logger.info("  1. Review the config file and choose a catalog source")
        logger.info("  2. Run 'per-world-plugins --list-worlds' to verify")
        return 0

    logger.error("\n✗ Failed to save configuration")
    return 1


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description=f"Per-World Plugins v{__version__} - Toggle server plugins per world",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show a world's settings
  %(prog)s --world world_nether

  # Start checking a world with a whitelist
  %(prog)s --world world_nether --enable-check --whitelist

  # Disable everything, then allow a single plugin back
  %(prog)s --world lobby --disable-all --enable LuckPerms

  # List worlds that have settings
  %(prog)s --list-worlds
        """
    )

    parser.add_argument("--init", action="store_true", help="Write a default config.yaml")
    parser.add_argument("--list-worlds", action="store_true", help="List worlds that have settings")
    parser.add_argument("--world", help="World to show or change")
    parser.add_argument("--status", action="store_true", help="Show the world's settings (default)")

    check = parser.add_mutually_exclusive_group()
    check.add_argument("--enable-check", action="store_true", help="Enforce plugin restrictions in the world")
    check.add_argument("--disable-check", action="store_true", help="Stop enforcing plugin restrictions in the world")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--whitelist", action="store_true", help="Listed plugins are the allowed ones")
    mode.add_argument("--blacklist", action="store_true", help="Listed plugins are the disallowed ones")

    bulk = parser.add_mutually_exclusive_group()
    bulk.add_argument("--enable-all", action="store_true", help="Enable every installed plugin in the world")
    bulk.add_argument("--disable-all", action="store_true", help="Disable every installed plugin in the world")

    parser.add_argument("--enable", action="append", metavar="PLUGIN", help="Enable a plugin in the world")
    parser.add_argument("--disable", action="append", metavar="PLUGIN", help="Disable a plugin in the world")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Config file override
    parser.add_argument("--config", type=Path, help="Path to config file (overrides default search paths)")

    args = parser.parse_args(argv)

    setup_logging()

    try:
        if args.init:
            return run_init(args.config)

        # Load configuration
        config = load_config(args.config if args.config else None)

        # Validate configuration
        is_valid, errors = validate_config(config)
        if not is_valid:
            logger.error("\n✗ Configuration validation failed:")
            for error in errors:
                logger.error(f"  - {error}")
            logger.info("\nRun 'per-world-plugins --init' to create a valid configuration")
            return 1

        store = WorldSettingsStore(
            Path(config['paths']['worlds_dir']).expanduser(),
            defaults=config.get('defaults'),
        )

        if args.list_worlds:
            for world_name in store.list_worlds():
                print(world_name)
            return 0

        if not args.world:
            parser.error("--world is required unless --list-worlds or --init is given")

        # One catalog read per run, remote catalogs download every jar
        catalog = SnapshotPluginCatalog(build_catalog(config))
        manager = WorldMenuManager(store, catalog, config.get('manager_plugin'))
        menu = manager.get_menu(args.world)

        try:
            exit_code = run_world_actions(menu, args)
        except StoreUnavailable as e:
            logger.error(f"✗ Failed to save settings: {e}")
            logger.error("  The change was not persisted")
            return 1

        show_status(menu)
        return exit_code

    except StoreUnavailable as e:
        logger.error(f"✗ Could not load settings: {e}")
        return 1
    except ValueError as e:
        logger.error(f"✗ {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("\n\nInterrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
