"""Errors raised while projecting Python types into TypeScript."""
from __future__ import annotations

from typing import Any


class RiptideError(Exception):
    """Base class for every error raised by riptide."""


class ClassificationError(RiptideError):
    """A type matched a classification rule it cannot be projected under."""

    def __init__(self, message: str, *, type_name: str) -> None:
        super().__init__(message)
        self.type_name = type_name


class UnsupportedKeyTypeError(ClassificationError):
    """A mapping is keyed by a type TypeScript index signatures cannot express."""

    def __init__(
        self,
        type_name: str,
        key_projection: str,
        *,
        owner_name: str | None = None,
        property_name: str | None = None,
    ) -> None:
        location = ""
        if owner_name is not None and property_name is not None:
            location = f" (property '{property_name}' of '{owner_name}')"
        super().__init__(
            f"Error when determining TypeScript type for Python type '{type_name}'{location}: "
            f"TypeScript dictionary key type must be either 'number' or 'string', got '{key_projection}'",
            type_name=type_name,
        )
        self.key_projection = key_projection
        self.owner_name = owner_name
        self.property_name = property_name

    def with_property(self, owner_name: str, property_name: str) -> "UnsupportedKeyTypeError":
        """Return a copy of this error that names the property it was raised for."""
        return UnsupportedKeyTypeError(
            self.type_name,
            self.key_projection,
            owner_name=owner_name,
            property_name=property_name,
        )


class TypePathError(RiptideError):
    """A dotted type path given on the command line could not be resolved."""

    def __init__(self, type_path: str, reason: Any) -> None:
        super().__init__(f"Cannot resolve type '{type_path}': {reason}")
        self.type_path = type_path
