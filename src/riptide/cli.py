"""Command line entry point: `riptide generate|types|watch|manifest`."""
from __future__ import annotations

import argparse
import logging
import sys

from riptide.commands.generate import register_generate_command, run_generate_command
from riptide.commands.manifest import register_manifest_command, run_manifest_command
from riptide.commands.types import register_types_command, run_types_command
from riptide.commands.watch import register_watch_command, run_watch_command


COMMAND_RUNNERS = {
    "generate": run_generate_command,
    "types": run_types_command,
    "watch": run_watch_command,
    "manifest": run_manifest_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="riptide", description="Project Python types into TypeScript.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_generate_command(subparsers)
    register_types_command(subparsers)
    register_watch_command(subparsers)
    register_manifest_command(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    run_command = COMMAND_RUNNERS.get(args.command)
    if run_command is None:
        parser.print_help()
        return 1

    try:
        return run_command(args)
    except Exception as exc:
        print(f"riptide: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
