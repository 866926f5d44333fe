"""Look up a route in the Vite build manifest."""
from __future__ import annotations

import argparse

from riptide.commands._shared import settings_from_args
from riptide.errors import RiptideError
from riptide.manifest import ManifestCache, RenderMode


def register_manifest_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `manifest` subcommand and its CLI arguments."""
    manifest_parser = subparsers.add_parser("manifest", help="Show the Vite manifest entry for a route.")
    manifest_parser.add_argument("route", help="Route key, e.g. /src/main.ts (case-insensitive).")
    manifest_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RenderMode],
        default=RenderMode.CSR.value,
        help="Which build's manifest to read.",
    )
    manifest_parser.add_argument("--base-dir", help="Project root (default: RIPTIDE_BASE_DIR or the working directory).")


def run_manifest_command(args: argparse.Namespace) -> int:
    """Print the manifest entry for the route as JSON."""
    manifest_cache = ManifestCache(settings_from_args(args))
    vite_route = manifest_cache.route(args.route, RenderMode(args.mode))
    if vite_route is None:
        raise RiptideError(f"No {args.mode} manifest entry for route '{args.route}'")
    print(vite_route.model_dump_json(indent=2, exclude_none=True), flush=True)
    return 0
