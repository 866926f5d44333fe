"""Generate the shared declarations, page contracts, and route ids."""
from __future__ import annotations

import argparse

from riptide.commands._shared import add_settings_arguments, ensure_app_dir_importable, settings_from_args
from riptide.pipeline import Pipeline


def register_generate_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `generate` subcommand and its CLI arguments."""
    generate_parser = subparsers.add_parser("generate", help="Generate TypeScript artifacts for page modules.")
    generate_parser.add_argument("modules", nargs="+", help="Modules or packages containing page models.")
    add_settings_arguments(generate_parser)


def run_generate_command(args: argparse.Namespace) -> int:
    """Import the page modules and write every artifact under the pages root."""
    ensure_app_dir_importable(args.app_dir)
    settings = settings_from_args(args)

    print(f"[riptide] pages_root={settings.pages_root}", flush=True)
    written_paths = Pipeline.run(args.modules, settings)
    for written_path in written_paths:
        print(f"[riptide] wrote {written_path}", flush=True)
    print(f"[riptide] {len(written_paths)} files written", flush=True)
    return 0
