"""Classification rules shared by the projector and the graph walker."""
from __future__ import annotations

import datetime
import decimal
import fractions
import uuid
from typing import Any, Optional

from riptide.typeref import TypeRef


# Python type -> TypeScript scalar
SIMPLE_SCALARS: dict[type, str] = {
    object: "Object",
    bool: "boolean",
    str: "string",
    bytes: "string",
    uuid.UUID: "string",
    int: "number",
    float: "number",
    decimal.Decimal: "number",
    fractions.Fraction: "number",
    datetime.datetime: "Date",
    datetime.date: "Date",
}


def simple_name(type_ref: TypeRef) -> Optional[str]:
    """TypeScript name of a simple scalar, or None when the type is not in the table."""
    annotation = type_ref.annotation
    if not isinstance(annotation, type):
        return None
    return SIMPLE_SCALARS.get(annotation)


def is_simple(type_ref: TypeRef) -> bool:
    return simple_name(type_ref) is not None


def is_dictionary(type_ref: TypeRef) -> bool:
    """Implements the key/value mapping protocol, typed or not."""
    return type_ref.implements_mapping


def is_collection(type_ref: TypeRef) -> bool:
    """Iterable of elements; strings, enums and mappings excluded."""
    origin = type_ref.origin
    if isinstance(origin, type) and issubclass(origin, (str, bytes)):
        return False
    if type_ref.is_enum or is_dictionary(type_ref):
        return False
    return type_ref.implements_iterable


def is_custom_generic(type_ref: TypeRef) -> bool:
    """A user-defined generic class; built-in collection and map shapes excluded."""
    return (
        type_ref.is_generic
        and not is_dictionary(type_ref)
        and not is_collection(type_ref)
        and not type_ref.is_framework
    )


def strip_nullable(type_ref: Optional[TypeRef]) -> Optional[TypeRef]:
    """Unwrap `Optional[X]` to `X`; anything else is returned unchanged."""
    if type_ref is None:
        return None
    return type_ref.nullable_underlying() or type_ref


def collection_element_type(type_ref: TypeRef) -> TypeRef:
    """Element type of a collection; `object` when only the untyped protocol is known."""
    return type_ref.iterable_element() or TypeRef(object)


def flatten(type_ref: Optional[TypeRef]) -> Optional[TypeRef]:
    """Replace a collection by its element type until a non-collection is reached."""
    if type_ref is None or is_simple(type_ref):
        return type_ref

    visited: set[TypeRef] = set()
    while type_ref is not None and is_collection(type_ref):
        # class Tree(list["Tree"]) would otherwise never terminate
        if type_ref in visited:
            return None
        visited.add(type_ref)
        type_ref = strip_nullable(collection_element_type(type_ref))
    return type_ref


def normalize(annotation: Any) -> Optional[TypeRef]:
    """Nullable-unwrap then collection-flatten an annotation."""
    return flatten(strip_nullable(TypeRef.of(annotation)))


def is_valid_graph_member(type_ref: Optional[TypeRef]) -> bool:
    """Whether an already normalized type may be a node of a type graph."""
    if type_ref is None or is_simple(type_ref) or type_ref.is_framework:
        return False
    if is_dictionary(type_ref):
        return False
    if not (type_ref.is_enum or type_ref.is_class):
        return False
    if not type_ref.is_public or type_ref.is_primitive:
        return False
    return not type_ref.is_generic or is_custom_generic(type_ref)
