"""Import user modules and resolve dotted type paths."""
from __future__ import annotations

import importlib
import pkgutil
from types import ModuleType
from typing import Any, Iterable

from riptide.errors import TypePathError


def import_modules(module_names: Iterable[str]) -> list[ModuleType]:
    """Import modules by name; packages are walked so every submodule is imported too."""
    imported_modules: dict[str, ModuleType] = {}
    for module_name in module_names:
        module = importlib.import_module(module_name)
        imported_modules[module.__name__] = module

        package_path = getattr(module, "__path__", None)
        if package_path is None:
            continue
        for module_info in pkgutil.walk_packages(package_path, prefix=f"{module.__name__}."):
            imported_modules[module_info.name] = importlib.import_module(module_info.name)

    return list(imported_modules.values())


def resolve_type_path(type_path: str) -> Any:
    """Resolve `package.module:Name` (or `package.module.Name`) to the object it names."""
    if ":" in type_path:
        module_name, _, attribute_path = type_path.partition(":")
    else:
        module_name, _, attribute_path = type_path.rpartition(".")

    if not module_name or not attribute_path:
        raise TypePathError(type_path, "expected 'module:Name' or 'module.Name'")

    try:
        resolved: Any = importlib.import_module(module_name)
    except ImportError as import_error:
        raise TypePathError(type_path, import_error) from import_error

    for attribute_name in attribute_path.split("."):
        try:
            resolved = getattr(resolved, attribute_name)
        except AttributeError as attribute_error:
            raise TypePathError(type_path, attribute_error) from attribute_error
    return resolved
