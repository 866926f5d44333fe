"""Arguments shared by the generation commands."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from riptide.config import Settings


def add_settings_arguments(command_parser: argparse.ArgumentParser) -> None:
    """Options that override the `RIPTIDE_*` settings for one run."""
    command_parser.add_argument("--base-dir", help="Project root (default: RIPTIDE_BASE_DIR or the working directory).")
    command_parser.add_argument("--pages-path", help="Pages root relative to the project root.")
    command_parser.add_argument("--pages-package", help="Package segment that marks the top of the pages tree.")
    command_parser.add_argument(
        "--component-extension",
        choices=(".svelte", ".tsx"),
        help="Extension of generated component scaffolds.",
    )
    command_parser.add_argument(
        "--app-dir",
        default=".",
        help="Directory to put on the import path before importing page modules.",
    )


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment settings with command line overrides applied."""
    overrides = {
        field_name: getattr(args, field_name)
        for field_name in ("base_dir", "pages_path", "pages_package", "component_extension")
        if getattr(args, field_name, None) is not None
    }
    return Settings(**overrides)


def ensure_app_dir_importable(app_dir: str) -> None:
    """Make the user's modules importable by name."""
    resolved_dir = str(Path(app_dir).resolve())
    if resolved_dir not in sys.path:
        sys.path.insert(0, resolved_dir)
