#!/usr/bin/env python3
"""Entry point: pick a menu action with a single keystroke."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Put the project root on the import path
ROOT = Path(__file__).resolve().parents[0]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from keymenu.cli.io import MenuIO
from keymenu.cli.menu import MenuRunner
from keymenu.cli.registry import MenuConfigError, MenuRegistry, load_registry

DEFAULT_CONFIG_PATH = "menus.json"
DEFAULT_LOG_LEVEL = "WARNING"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show a one-line menu and run the action bound to the pressed key."
    )
    parser.add_argument(
        "menu",
        nargs="?",
        default=None,
        help="Menu name; omitted or unknown shows the menu of menus",
    )
    parser.add_argument(
        "--config",
        default=_env_str("KEYMENU_CONFIG") or DEFAULT_CONFIG_PATH,
        help="Menu config JSON (env: KEYMENU_CONFIG)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print registered menus and exit",
    )
    return parser


def main(argv: list[str] | None = None, io: MenuIO | None = None) -> int:
    _autoload_dotenv()
    args = build_parser().parse_args(argv)
    menu_io = io if io is not None else MenuIO()

    try:
        _configure_logging()
        registry = load_registry(args.config)
    except ValueError as exc:
        menu_io.write(f"Error: {exc}")
        return 2

    if args.list:
        _print_menus(menu_io, registry)
        return 0

    if not menu_io.is_interactive():
        menu_io.write("Error: menu selection requires an interactive TTY (stdin/stdout).")
        return 2

    runner = MenuRunner(registry, menu_io)
    try:
        selection = runner.run(args.menu)
    except MenuConfigError as exc:
        menu_io.write(f"Error: {exc}")
        return 2
    except EOFError:
        return 0
    except KeyboardInterrupt:
        return 130
    return 1 if selection.aborted else 0


def _print_menus(io: MenuIO, registry: MenuRegistry) -> None:
    for name, menu in registry.menus.items():
        io.write(f"{name}: {menu.title}")


def _resolve_log_level() -> int:
    level_name = (_env_str("KEYMENU_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(
            f"Environment variable KEYMENU_LOG_LEVEL is not a log level: {level_name}"
        )
    return level


def _configure_logging() -> None:
    level = _resolve_log_level()
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")


def _autoload_dotenv() -> None:
    dotenv_path = find_dotenv(filename=".env", usecwd=True)
    if dotenv_path:
        _ = load_dotenv(dotenv_path=dotenv_path, encoding="utf-8")


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


if __name__ == "__main__":
    sys.exit(main())
