"""Build the generated TypeScript artifacts for a set of pages and write them to disk."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from riptide.config import Settings
from riptide.emit import render_declarations
from riptide.graph import discover
from riptide.pages import (
    collect_roots,
    discover_pages,
    page_directory,
    page_name,
    render_component_scaffold,
    render_page_contract,
    render_route_ids,
)


logger = logging.getLogger(__name__)


# ============================================================
# Artifacts
# ============================================================

@dataclass(frozen=True)
class PageArtifact:
    """Generated files for one page, relative to the pages root."""
    page_name: str
    contract_path: Path
    contract_text: str
    component_path: Path
    component_text: str


@dataclass
class Artifacts:
    """Everything one generation run produces, as text keyed by destination path."""
    types_path: Path
    types_text: str
    routes_path: Path
    routes_text: str
    pages: list[PageArtifact] = field(default_factory=list)
    type_names: list[str] = field(default_factory=list)


# ============================================================
# Import paths
# ============================================================

def ensure_relative_typescript_import_path(import_path: str) -> str:
    """
    Ensures a TS import is relative:
      "types" -> "./types"
      "../types" -> "../types"
    """
    if import_path.startswith("./") or import_path.startswith("../"):
        return import_path
    return f"./{import_path}"


def compute_typescript_import_path_without_extension(from_file: Path, to_file: Path) -> str:
    """Module path from from_file to to_file without the ".ts" extension, e.g. `../types`."""
    relative_path = os.path.relpath(to_file.with_suffix(""), start=from_file.parent)
    return ensure_relative_typescript_import_path(Path(relative_path).as_posix())


# ============================================================
# Pipeline
# ============================================================

class Pipeline:
    """Discover types from pages, render the artifacts, and write them."""

    @staticmethod
    def build_artifacts(
        page_types: Iterable[type],
        settings: Settings,
        extra_roots: Iterable[Any] = (),
    ) -> Artifacts:
        """Render every artifact as text; nothing is written."""
        page_types = list(page_types)
        pages_root = settings.pages_root

        roots = [*collect_roots(page_types), *extra_roots]
        graph = discover(roots)
        logger.info("Discovered %d types from %d pages", len(graph), len(page_types))

        artifacts = Artifacts(
            types_path=settings.types_path,
            types_text=render_declarations(graph),
            routes_path=settings.routes_path,
            routes_text=render_route_ids(page_types, settings.pages_package),
            type_names=graph.names(),
        )

        for page_type in page_types:
            name = page_name(page_type)
            page_dir = pages_root / page_directory(page_type, settings.pages_package)
            contract_path = page_dir / f"{name}.ts"
            types_module_path = compute_typescript_import_path_without_extension(
                from_file=contract_path,
                to_file=settings.types_path,
            )
            artifacts.pages.append(
                PageArtifact(
                    page_name=name,
                    contract_path=contract_path,
                    contract_text=render_page_contract(page_type, types_module_path=types_module_path),
                    component_path=page_dir / f"{name}{settings.component_extension}",
                    component_text=render_component_scaffold(name, settings.component_extension),
                )
            )

        return artifacts

    @staticmethod
    def write_artifacts(artifacts: Artifacts) -> list[Path]:
        """Write the artifacts; component scaffolds are only created, never overwritten.

        Returns the paths actually written.
        """
        written_paths: list[Path] = []

        def write(path: Path, text: str) -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            written_paths.append(path)

        write(artifacts.types_path, artifacts.types_text)
        write(artifacts.routes_path, artifacts.routes_text)

        for page_artifact in artifacts.pages:
            write(page_artifact.contract_path, page_artifact.contract_text)
            if page_artifact.component_path.exists():
                logger.debug("Keeping existing component %s", page_artifact.component_path)
                continue
            write(page_artifact.component_path, page_artifact.component_text)

        return written_paths

    @staticmethod
    def run(module_names: Iterable[str], settings: Settings) -> list[Path]:
        """Import page modules, then build and write all artifacts."""
        page_types = discover_pages(module_names)
        artifacts = Pipeline.build_artifacts(page_types, settings)
        return Pipeline.write_artifacts(artifacts)
