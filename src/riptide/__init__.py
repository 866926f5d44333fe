"""Project Python types into TypeScript declarations and page data contracts."""
from __future__ import annotations

from riptide.emit import render_declaration, render_declarations
from riptide.graph import TypeGraph, discover
from riptide.pages import Bind, Page
from riptide.project import project

__all__ = [
    "Bind",
    "Page",
    "TypeGraph",
    "discover",
    "project",
    "render_declaration",
    "render_declarations",
]
