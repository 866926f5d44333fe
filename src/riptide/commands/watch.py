"""Regenerate artifacts whenever page sources change."""
from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path

from watchfiles import DefaultFilter, watch

from riptide.commands._shared import add_settings_arguments


class InputsFilter(DefaultFilter):
    """Only Python sources, outside caches and dependency folders."""

    def __call__(self, change, path: str) -> bool:
        p = path.replace("\\", "/")
        if "__pycache__" in p or p.endswith(".pyc"):
            return False
        if "/.git/" in p or "/node_modules/" in p:
            return False
        return p.endswith(".py")


def register_watch_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `watch` subcommand and its CLI arguments."""
    watch_parser = subparsers.add_parser("watch", help="Regenerate artifacts when Python sources change.")
    watch_parser.add_argument("modules", nargs="+", help="Modules or packages containing page models.")
    watch_parser.add_argument(
        "--watch-dir",
        action="append",
        dest="watch_dirs",
        help="Directory to watch (repeatable; default: --app-dir).",
    )
    watch_parser.add_argument("--debounce", type=int, default=300, help="Debounce window in milliseconds.")
    add_settings_arguments(watch_parser)


def build_generate_command(args: argparse.Namespace) -> list[str]:
    """The `riptide generate` invocation equivalent to this watch session."""
    cmd = [sys.executable, "-m", "riptide", "generate", *args.modules, "--app-dir", args.app_dir]
    for option_name in ("base_dir", "pages_path", "pages_package", "component_extension"):
        option_value = getattr(args, option_name, None)
        if option_value is not None:
            cmd.extend([f"--{option_name.replace('_', '-')}", str(option_value)])
    return cmd


def run_generation(cmd: list[str]) -> int:
    """Generate in a fresh interpreter so edited modules are re-imported."""
    print("\n[riptide] Generating TypeScript artifacts...", flush=True)
    result = subprocess.run(cmd, check=False)
    if result.returncode == 0:
        print("[riptide] OK", flush=True)
    else:
        print(f"[riptide] FAILED (exit {result.returncode})", flush=True)
    return result.returncode


def run_watch_command(args: argparse.Namespace) -> int:
    """Generate once, then again on every batch of source changes."""
    watch_dirs = [Path(watch_dir).resolve() for watch_dir in (args.watch_dirs or [args.app_dir])]
    missing_dirs = [watch_dir for watch_dir in watch_dirs if not watch_dir.is_dir()]
    if missing_dirs:
        raise FileNotFoundError(f"Watch directory not found: {missing_dirs[0]}")

    cmd = build_generate_command(args)
    run_generation(cmd)

    print("[riptide] Watching:", flush=True)
    for watch_dir in watch_dirs:
        print("  -", watch_dir, flush=True)

    try:
        for changes in watch(*map(str, watch_dirs), watch_filter=InputsFilter(), debounce=args.debounce):
            changed = sorted({p.replace("\\", "/") for (_c, p) in changes})
            print("\n[riptide] Change detected:", flush=True)
            for p in changed:
                print("  -", p, flush=True)

            run_generation(cmd)
            time.sleep(0.05)
    except KeyboardInterrupt:
        return 0
    return 0
