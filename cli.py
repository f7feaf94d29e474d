"""Lightweight CLI for edmkts lookups and database setup.

Usage:
    edmkts commodity Gold             # commodity statistics as JSON
    edmkts commodity Gold --legacy    # same, without the Odyssey edition filter
    edmkts system 10477373803         # system with stars and planets as JSON
    edmkts init-db                    # create the schema for the active database
    edmkts log-level DEBUG            # set log level in settings.toml
"""

import argparse
import json
import logging
import re
import sys

from logging_config import set_level
from settings_service import SETTINGS_PATH, _load_settings, clear_settings_cache

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _edition(args: argparse.Namespace) -> bool:
    if args.legacy:
        return False
    from settings_service import SettingsService
    return SettingsService().default_odyssey


def _print_result(result) -> int:
    if result is None:
        print("not found")
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def cmd_commodity(args: argparse.Namespace) -> int:
    """Look up a commodity by exact name."""
    from services.lookup_service import get_lookup_service

    return _print_result(get_lookup_service().lookup_commodity(args.name, _edition(args)))


def cmd_system(args: argparse.Namespace) -> int:
    """Look up a system by address."""
    from services.lookup_service import get_lookup_service

    return _print_result(get_lookup_service().lookup_system(args.address, _edition(args)))


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the lookup schema."""
    from init_db import init_db

    ok = init_db(args.alias)
    print("ok" if ok else "failed")
    return 0 if ok else 1


def cmd_log_level(args: argparse.Namespace) -> int:
    """Get or set the log level in settings.toml."""
    settings = _load_settings()
    current = settings["env"]["log_level"]

    if args.level is None:
        print(current)
        return 0

    level = args.level.upper()
    if level not in VALID_LOG_LEVELS:
        print(f"invalid level: {args.level} (expected one of {', '.join(VALID_LOG_LEVELS)})")
        return 1

    if level == current:
        print(f"already {level}")
        return 0

    content = SETTINGS_PATH.read_text()
    updated = re.sub(
        r'(log_level\s*=\s*)"[^"]*"',
        rf'\1"{level}"',
        content,
    )
    SETTINGS_PATH.write_text(updated)
    clear_settings_cache()
    set_level(None)
    print(f"{current} → {level}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edmkts", description="edmkts lookup tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed logs")
    sub = parser.add_subparsers(dest="command")

    commodity_parser = sub.add_parser("commodity", help="Look up commodity price statistics")
    commodity_parser.add_argument("name", help="Commodity name (exact, case-sensitive)")
    commodity_parser.add_argument("--legacy", action="store_true", help="Query pre-Odyssey data")

    system_parser = sub.add_parser("system", help="Look up a system with its stars and planets")
    system_parser.add_argument("address", type=int, help="System address")
    system_parser.add_argument("--legacy", action="store_true", help="Query pre-Odyssey data")

    init_parser = sub.add_parser("init-db", help="Create the lookup schema")
    init_parser.add_argument("--alias", default=None, help="Database alias from settings.toml")

    ll_parser = sub.add_parser("log-level", help="Get or set the log level in settings.toml")
    ll_parser.add_argument("level", nargs="?", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    return parser


COMMANDS = {
    "commodity": cmd_commodity,
    "system": cmd_system,
    "init-db": cmd_init_db,
    "log-level": cmd_log_level,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_level(logging.DEBUG)
    else:
        # Keep stdout to the JSON result
        logging.disable(logging.INFO)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
