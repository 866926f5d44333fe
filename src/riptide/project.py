"""Project Python types into TypeScript type expressions."""
from __future__ import annotations

import logging
import typing
from typing import Any

from riptide.classify import (
    collection_element_type,
    is_collection,
    is_custom_generic,
    is_dictionary,
    is_valid_graph_member,
    simple_name,
    strip_nullable,
)
from riptide.errors import UnsupportedKeyTypeError
from riptide.typeref import TypeRef, strip_arity


logger = logging.getLogger(__name__)

FALLBACK_TYPE = "any"
MAP_KEY_TYPES = frozenset({"number", "string"})
UNTYPED_MAP_TYPE = "{ [key: string]: string; }"


def project(annotation: Any, use_concrete_generic_args: bool = True) -> str:
    """Return the TypeScript type expression for a Python type.

    `annotation` may be a `TypeRef` or anything `TypeRef` accepts. `None`
    means "no type" and projects to `any`.

    With `use_concrete_generic_args` false, a custom generic is referenced
    through its definition's parameter names (`Box<T>`) instead of its
    resolved arguments (`Box<string>`).

    Raises `UnsupportedKeyTypeError` for a mapping whose key type does not
    project to `number` or `string`.
    """
    type_ref = strip_nullable(TypeRef.of(annotation))
    if type_ref is None:
        return FALLBACK_TYPE

    scalar_name = simple_name(type_ref)
    if scalar_name is not None:
        return scalar_name

    if type_ref.is_enum:
        return strip_arity(type_ref.name)

    if is_collection(type_ref):
        element_name = project(collection_element_type(type_ref), use_concrete_generic_args)
        return f"{element_name}[]"

    if is_dictionary(type_ref):
        return _project_mapping(type_ref, use_concrete_generic_args)

    if is_custom_generic(type_ref):
        return _project_custom_generic(type_ref, use_concrete_generic_args)

    if type_ref.is_unresolved or type_ref.is_framework:
        if type_ref.annotation is not typing.Any:
            logger.warning("No TypeScript mapping for %s, using '%s'", type_ref.full_name, FALLBACK_TYPE)
        return FALLBACK_TYPE

    return strip_arity(type_ref.name)


def _project_mapping(type_ref: TypeRef, use_concrete_generic_args: bool) -> str:
    """Project a mapping into an index-signature object type."""
    arguments = type_ref.mapping_arguments()
    if arguments is None:
        return UNTYPED_MAP_TYPE

    key_type, value_type = arguments
    key_name = project(key_type, use_concrete_generic_args)
    value_name = project(value_type, use_concrete_generic_args)
    if key_name not in MAP_KEY_TYPES:
        raise UnsupportedKeyTypeError(type_ref.full_name, key_name)
    return f"{{ [key: {key_name}]: {value_name}; }}"


def _project_custom_generic(type_ref: TypeRef, use_concrete_generic_args: bool) -> str:
    """Project a user generic as `Name<Arg1, ..., ArgN>`."""
    arguments = type_ref.generic_args
    if not use_concrete_generic_args and type_ref.generic_parameters:
        arguments = type_ref.generic_parameters

    argument_names = [
        argument.name if argument.is_generic_parameter else project(argument, use_concrete_generic_args)
        for argument in arguments
    ]
    return f"{strip_arity(type_ref.name)}<{', '.join(argument_names)}>"


def declared_type_names(annotation: Any) -> list[str]:
    """Names of the declarations a projected type expression refers to, in order."""
    found_names: dict[str, None] = {}
    _collect_declared_type_names(TypeRef.of(annotation), found_names)
    return list(found_names)


def _collect_declared_type_names(type_ref: TypeRef | None, found_names: dict[str, None]) -> None:
    """Walk a type the way `project` does, recording referenced declaration names."""
    type_ref = strip_nullable(type_ref)
    if type_ref is None or simple_name(type_ref) is not None or type_ref.is_generic_parameter:
        return

    if type_ref.is_enum:
        if is_valid_graph_member(type_ref):
            found_names[strip_arity(type_ref.name)] = None
        return

    if is_collection(type_ref):
        _collect_declared_type_names(collection_element_type(type_ref), found_names)
        return

    if is_dictionary(type_ref):
        for argument in type_ref.mapping_arguments() or ():
            _collect_declared_type_names(argument, found_names)
        return

    if is_custom_generic(type_ref):
        if is_valid_graph_member(type_ref):
            found_names[strip_arity(type_ref.name)] = None
        for argument in type_ref.generic_args:
            _collect_declared_type_names(argument, found_names)
        return

    if type_ref.is_unresolved or type_ref.is_framework:
        return

    # only types the walker declares can be imported from the declarations file
    if is_valid_graph_member(type_ref):
        found_names[strip_arity(type_ref.name)] = None
