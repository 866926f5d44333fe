"""Turn discovered types into TypeScript declarations."""
from __future__ import annotations

from typing import Iterable, Union

from riptide.errors import UnsupportedKeyTypeError
from riptide.graph import TypeDescriptor
from riptide.project import project
from riptide.typeref import TypeRef, strip_arity


GENERATED_HEADER = "/* eslint-disable */\n// This file is automatically generated by riptide\n"
PROPERTY_INDENT = "    "


def camel_case(name: str) -> str:
    """Lowercase the first character only; names shorter than two characters are lowercased whole."""
    if len(name) < 2:
        return name.lower()
    return name[0].lower() + name[1:]


def render_property_lines(owner_name: str, type_ref: TypeRef) -> list[str]:
    """Render `name: Type;` lines for the properties of a type."""
    output_lines: list[str] = []
    for property_descriptor in type_ref.properties():
        try:
            property_type = project(property_descriptor.type_ref)
        except UnsupportedKeyTypeError as key_error:
            raise key_error.with_property(owner_name, property_descriptor.name) from key_error
        output_lines.append(f"{PROPERTY_INDENT}{camel_case(property_descriptor.name)}: {property_type};")
    return output_lines


def render_declaration(
    declared: Union[TypeDescriptor, TypeRef],
    use_concrete_generic_args: bool = False,
) -> str:
    """Render one type alias: a string-literal union for enums, an object type otherwise.

    A generic type is declared through its definition (`Box<T>`) unless
    `use_concrete_generic_args` is set, in which case the body is resolved
    against the type's own arguments and the head is the instantiated
    reference (`Box<string>`); that form is for inspection, not for a
    declarations file.
    """
    type_ref = declared.type_ref if isinstance(declared, TypeDescriptor) else declared

    if type_ref.is_enum:
        member_literals = " | ".join(f"'{member_name}'" for member_name in type_ref.annotation.__members__)
        return f"export type {strip_arity(type_ref.name)} = {member_literals};"

    if type_ref.is_generic and not use_concrete_generic_args:
        type_ref = type_ref.definition()

    declaration_head = project(type_ref)
    property_lines = render_property_lines(declaration_head, type_ref)
    if not property_lines:
        return f"export type {declaration_head} = {{}};"

    output_lines = [f"export type {declaration_head} = {{"]
    output_lines.extend(property_lines)
    output_lines.append("};")
    return "\n".join(output_lines)


def render_declarations(descriptors: Iterable[TypeDescriptor]) -> str:
    """Render a declarations file for descriptors in the order given.

    Instantiations of one generic definition share a single declaration.
    """
    declarations: list[str] = []
    seen_declarations: set[str] = set()
    for descriptor in descriptors:
        declaration = render_declaration(descriptor)
        if declaration in seen_declarations:
            continue
        seen_declarations.add(declaration)
        declarations.append(declaration)

    return GENERATED_HEADER + "\n" + "\n\n".join(declarations) + "\n"
