"""Print or write the declarations reachable from explicit root types."""
from __future__ import annotations

import argparse
from pathlib import Path

from riptide.commands._shared import ensure_app_dir_importable
from riptide.emit import GENERATED_HEADER, render_declaration, render_declarations
from riptide.graph import discover
from riptide.loader import resolve_type_path


def register_types_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `types` subcommand and its CLI arguments."""
    types_parser = subparsers.add_parser("types", help="Render declarations for root types.")
    types_parser.add_argument("types", nargs="+", help="Root types as 'module:Name' or 'module.Name'.")
    types_parser.add_argument("--out", help="Write the declarations to this file instead of stdout.")
    types_parser.add_argument(
        "--concrete",
        action="store_true",
        help="Resolve generic arguments in each declaration (inspection output).",
    )
    types_parser.add_argument("--app-dir", default=".", help="Directory to put on the import path.")


def render_types_document(root_types: list[object], *, concrete: bool = False) -> str:
    """Declarations for the closure of `root_types`."""
    graph = discover(root_types)
    if not concrete:
        return render_declarations(graph)
    declarations = [render_declaration(descriptor, use_concrete_generic_args=True) for descriptor in graph]
    return GENERATED_HEADER + "\n" + "\n\n".join(declarations) + "\n"


def run_types_command(args: argparse.Namespace) -> int:
    """Resolve the root types and emit their declarations."""
    ensure_app_dir_importable(args.app_dir)
    root_types = [resolve_type_path(type_path) for type_path in args.types]
    generated_typescript = render_types_document(root_types, concrete=args.concrete)

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(generated_typescript, encoding="utf-8")
        print(f"[riptide] wrote {output_path}", flush=True)
    else:
        print(generated_typescript, end="")
    return 0
