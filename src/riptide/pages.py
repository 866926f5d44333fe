"""Page models and the per-page TypeScript artifacts derived from them."""
from __future__ import annotations

import sys
import typing
from typing import Any, Iterable, Optional

from riptide.emit import PROPERTY_INDENT, camel_case
from riptide.errors import RiptideError, UnsupportedKeyTypeError
from riptide.loader import import_modules
from riptide.project import declared_type_names, project
from riptide.typeref import PropertyDescriptor, TypeRef
from riptide.validation import ModelStateEntry


MODEL_STATE_TYPE_NAME = "ModelStateEntry"
MODEL_STATE_FIELD = "modelState"
INDEX_PAGE_NAME = "Index"


# ============================================================
# Page models
# ============================================================

class Bind:
    """Marks a page attribute as part of the component data: `notes: Annotated[list[Note], Bind]`."""


class Page:
    """Base class for page models rendered through a frontend component."""

    model_state: dict[str, ModelStateEntry]

    def __init__(self) -> None:
        self.model_state = {}

    def component_data(self) -> Optional[dict[str, Any]]:
        """Bound values keyed by camel-cased name plus the validation state; None without bound values."""
        properties = bound_properties(type(self))
        if not properties:
            return None

        data = {
            camel_case(property_descriptor.name): getattr(self, property_descriptor.name, None)
            for property_descriptor in properties
        }
        data[MODEL_STATE_FIELD] = getattr(self, "model_state", {})
        return data


def _is_bind_marker(metadata_item: Any) -> bool:
    return metadata_item is Bind or isinstance(metadata_item, Bind)


def bound_properties(page_type: type) -> list[PropertyDescriptor]:
    """Attributes of a page class annotated with the `Bind` marker, in declaration order."""
    bound: list[PropertyDescriptor] = []
    for attribute_name, hint in typing.get_type_hints(page_type, include_extras=True).items():
        if typing.get_origin(hint) is not typing.Annotated:
            continue
        if any(_is_bind_marker(metadata_item) for metadata_item in hint.__metadata__):
            bound.append(PropertyDescriptor(name=attribute_name, type_ref=TypeRef(hint)))
    return bound


def _all_subclasses(base_class: type) -> list[type]:
    found_classes: list[type] = []
    for subclass in base_class.__subclasses__():
        found_classes.append(subclass)
        found_classes.extend(_all_subclasses(subclass))
    return found_classes


def discover_pages(module_names: Iterable[str]) -> list[type[Page]]:
    """Import the given modules and return the page classes they define."""
    imported_names = {module.__name__ for module in import_modules(module_names)}
    page_types = {
        page_type for page_type in _all_subclasses(Page) if page_type.__module__ in imported_names
    }
    return sorted(page_types, key=lambda page_type: (page_type.__module__, page_type.__qualname__))


def collect_roots(page_types: Iterable[type]) -> list[TypeRef]:
    """Distinct bound property types of all pages, plus the validation-state entry type."""
    roots: dict[TypeRef, None] = {}
    for page_type in page_types:
        for property_descriptor in bound_properties(page_type):
            roots[property_descriptor.type_ref] = None
    roots[TypeRef(ModelStateEntry)] = None
    return list(roots)


# ============================================================
# Naming + paths
# ============================================================

def page_name(page_type: type) -> str:
    """Component name of a page: the class name without a trailing `Model`."""
    class_name = page_type.__name__
    if class_name.endswith("Model") and class_name != "Model":
        return class_name[: -len("Model")]
    return class_name


def page_directory(page_type: type, pages_package: str = "pages") -> str:
    """Directory of a page relative to the pages root, derived from its package path.

    `app.pages.admin.users.UsersModel` -> `admin/`. Returns "" for pages
    directly in the pages package.
    """
    segments = page_type.__module__.split(".")
    module = sys.modules.get(page_type.__module__)
    if module is None or not hasattr(module, "__path__"):
        segments = segments[:-1]

    if pages_package in segments:
        last_index = len(segments) - 1 - segments[::-1].index(pages_package)
        segments = segments[last_index + 1:]

    return "".join(f"{segment}/" for segment in segments)


def route_id(page_type: type, pages_package: str = "pages") -> Optional[str]:
    """Route of a page (`/admin/Users`); index pages resolve to their directory. None for private pages."""
    name = page_name(page_type)
    if name.startswith("_"):
        return None
    leaf = "" if name == INDEX_PAGE_NAME else name
    return f"/{page_directory(page_type, pages_package)}{leaf}"


# ============================================================
# Renderers
# ============================================================

def render_route_ids(page_types: Iterable[type], pages_package: str = "pages") -> str:
    """Render `utils.d.ts` declaring the global `RouteId` type."""
    routes = [route for route in (route_id(page_type, pages_package) for page_type in page_types) if route is not None]
    union_members = [f'"{route}"' for route in dict.fromkeys(routes)]
    union_members.extend(["undefined", "string & {}"])

    output_lines = [
        "declare global {",
        f"{PROPERTY_INDENT}type RouteId = {' | '.join(union_members)};",
        "}",
        "export {}",
    ]
    return "\n".join(output_lines) + "\n"


def render_page_contract(page_type: type, *, types_module_path: str) -> str:
    """Render `<Name>.ts`: the data shape handed to the page component."""
    name = page_name(page_type)
    properties = bound_properties(page_type)

    import_names: dict[str, None] = {}
    property_lines: list[str] = []
    for property_descriptor in properties:
        try:
            property_type = project(property_descriptor.type_ref)
        except UnsupportedKeyTypeError as key_error:
            raise key_error.with_property(page_type.__qualname__, property_descriptor.name) from key_error
        property_lines.append(f"{PROPERTY_INDENT}{camel_case(property_descriptor.name)}: {property_type};")
        import_names.update(dict.fromkeys(declared_type_names(property_descriptor.type_ref)))
    import_names[MODEL_STATE_TYPE_NAME] = None

    output_lines = [
        f'import type {{ {", ".join(import_names)} }} from "{types_module_path}";',
        "",
        f"export interface {name}Data {{",
        *property_lines,
        f"{PROPERTY_INDENT}{MODEL_STATE_FIELD}: Record<string, {MODEL_STATE_TYPE_NAME}>;",
        "}",
    ]
    return "\n".join(output_lines) + "\n"


def _svelte_scaffold(name: str) -> list[str]:
    return [
        '<script lang="ts">',
        f'{PROPERTY_INDENT}import type {{ {name}Data }} from "./{name}";',
        f"{PROPERTY_INDENT}export let data: {name}Data;",
        "</script>",
    ]


def _react_scaffold(name: str) -> list[str]:
    return [
        f'import type {{ {name}Data }} from "./{name}";',
        "",
        f"export default function {name}({{ data }}: {{ data: {name}Data }}) {{",
        f"{PROPERTY_INDENT}return null;",
        "}",
    ]


SCAFFOLD_RENDERERS = {
    ".svelte": _svelte_scaffold,
    ".tsx": _react_scaffold,
}


def render_component_scaffold(name: str, extension: str = ".svelte") -> str:
    """Render the starting component for a page, typed with its data contract."""
    renderer = SCAFFOLD_RENDERERS.get(extension)
    if renderer is None:
        supported = ", ".join(sorted(SCAFFOLD_RENDERERS))
        raise RiptideError(f"Unsupported component extension '{extension}' (expected one of: {supported})")
    return "\n".join(renderer(name)) + "\n"
