from __future__ import annotations

import pytest

from fixture_types import Author, BadKeys, Box, Inventory, Note, Priority, Shelf, Tag
from riptide.emit import GENERATED_HEADER, camel_case, render_declaration, render_declarations
from riptide.errors import UnsupportedKeyTypeError
from riptide.graph import descriptor_for, discover
from riptide.typeref import TypeRef


@pytest.mark.parametrize(
    ("name", "expected"),
    [("Id", "id"), ("A", "a"), ("", ""), ("HTMLPage", "hTMLPage"), ("created_at", "created_at")],
)
def test_camel_case(name: str, expected: str) -> None:
    assert camel_case(name) == expected


def test_enum_declaration_is_a_literal_union() -> None:
    assert render_declaration(TypeRef(Priority)) == "export type Priority = 'LOW' | 'HIGH';"


def test_object_declaration_lists_properties_in_order() -> None:
    assert render_declaration(descriptor_for(Note)) == "\n".join(
        [
            "export type Note = {",
            "    id: number;",
            "    title: string;",
            "    created_at: Date;",
            "    priority: Priority;",
            "    tags: Tag[];",
            "    parent: Note;",
            "};",
        ]
    )


def test_maps_and_generics_inside_declarations() -> None:
    assert render_declaration(TypeRef(Inventory)) == "\n".join(
        [
            "export type Inventory = {",
            "    counts: { [key: string]: number; };",
            "    by_id: { [key: number]: Note; };",
            "    boxes: Box<Tag>[];",
            "    grid: Tag[][];",
            "};",
        ]
    )


def test_generic_declaration_open_and_concrete() -> None:
    assert render_declaration(TypeRef(Box[str])) == "export type Box<T> = {\n    value: T;\n};"
    assert (
        render_declaration(TypeRef(Box[str]), use_concrete_generic_args=True)
        == "export type Box<string> = {\n    value: string;\n};"
    )


def test_pydantic_properties_include_getters() -> None:
    assert render_declaration(TypeRef(Author)) == "\n".join(
        [
            "export type Author = {",
            "    name: string;",
            "    uid: string;",
            "    notes: Note[];",
            "    display_name: string;",
            "};",
        ]
    )


def test_unsupported_key_names_the_property() -> None:
    with pytest.raises(UnsupportedKeyTypeError) as excinfo:
        render_declaration(TypeRef(BadKeys))

    assert excinfo.value.owner_name == "BadKeys"
    assert excinfo.value.property_name == "by_tag"
    assert "property 'by_tag' of 'BadKeys'" in str(excinfo.value)


def test_declarations_document_shares_generic_definitions() -> None:
    document = render_declarations(discover([Shelf]))

    assert document.startswith(GENERATED_HEADER)
    assert document.count("export type Box<T> = {") == 1
    assert document.index("export type Shelf") < document.index("export type Box<T>")
    assert "export type Tag = {\n    label: string;\n};" in document
    assert "    small: Box<Tag>;" in document
    assert "    large: Box<Note>;" in document
