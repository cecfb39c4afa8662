"""Application entrypoint.

Loads settings, builds a ``DataLoaderManager`` and runs one command, printing
its result as JSON on stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from src.core.data_loader_manager import DataLoaderManager
from src.core.errors import DataLoaderError
from src.core.settings import SettingsError, load_settings
from src.libs.loader.templates import loader_kinds
from src.observability.logger import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load dashboard data from the vault, APIs and scripts")
    parser.add_argument("--settings", default="config/settings.yaml", help="Settings file path")
    commands = parser.add_subparsers(dest="command", required=True)

    load = commands.add_parser("load", help="Load a vault file")
    load.add_argument("path", help="Vault-relative file path")

    fetch = commands.add_parser("fetch", help="Fetch data from an external API")
    fetch.add_argument("url")

    run = commands.add_parser("run", help="Run a loader script file")
    run.add_argument("script", help="Path to the script on the local filesystem")
    run.add_argument("--name", default=None, help="Loader name (defaults to the file stem)")

    commands.add_parser("files", help="List data files in the vault")

    template = commands.add_parser("template", help="Print or write a loader template")
    template.add_argument("kind", choices=loader_kinds())
    template.add_argument("--write", action="store_true", help="Write it into the loader folder")

    dashboard = commands.add_parser("dashboard", help="Create a dashboard or list its blocks")
    group = dashboard.add_mutually_exclusive_group(required=True)
    group.add_argument("--new", action="store_true", help="Create a new dashboard document")
    group.add_argument("--blocks", metavar="PATH", help="List the code blocks of a dashboard")

    return parser


async def run_command(manager: DataLoaderManager, args: argparse.Namespace) -> Any:
    if args.command == "load":
        return await manager.load_from_file(args.path)
    if args.command == "fetch":
        return await manager.load_from_api(args.url)
    if args.command == "run":
        script_path = Path(args.script)
        source_code = script_path.read_text(encoding="utf-8")
        return await manager.execute_loader(args.name or script_path.stem, source_code)
    if args.command == "files":
        return [ref.to_dict() for ref in await manager.get_data_files()]
    if args.command == "template":
        if args.write:
            return (await manager.create_loader_file(args.kind)).to_dict()
        return manager.create_loader_template(args.kind)
    if args.command == "dashboard":
        if args.new:
            return (await manager.create_dashboard()).to_dict()
        return await manager.read_dashboard_blocks(args.blocks)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.settings)
    except SettingsError as e:
        get_logger().error(str(e))
        raise SystemExit(1) from e

    logger = get_logger(level=settings.observability.log_level)
    manager = DataLoaderManager(settings)

    try:
        result = asyncio.run(run_command(manager, args))
    except (DataLoaderError, OSError, ValueError) as e:
        logger.error(str(e))
        raise SystemExit(1) from e

    if isinstance(result, str):
        sys.stdout.write(result if result.endswith("\n") else result + "\n")
    else:
        sys.stdout.write(json.dumps(result, ensure_ascii=False, indent=2, default=str) + "\n")
    sys.stdout.flush()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
