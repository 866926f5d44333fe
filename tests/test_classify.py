from __future__ import annotations

from typing import Any, Callable, Optional

from fixture_types import (
    Author,
    Box,
    Inventory,
    Note,
    Priority,
    Registry,
    Tag,
    TagList,
    TagStream,
    UntypedStream,
    WordCounts,
    _Hidden,
)
from riptide.classify import (
    flatten,
    is_collection,
    is_custom_generic,
    is_dictionary,
    is_simple,
    is_valid_graph_member,
    normalize,
    simple_name,
)
from riptide.typeref import TypeRef


def test_simple_scalars_map_to_typescript_names() -> None:
    assert simple_name(TypeRef(int)) == "number"
    assert simple_name(TypeRef(bool)) == "boolean"
    assert simple_name(TypeRef(object)) == "Object"
    assert simple_name(TypeRef(Note)) is None
    assert not is_simple(TypeRef(list[int]))


def test_strings_and_enums_are_not_collections() -> None:
    assert not is_collection(TypeRef(str))
    assert not is_collection(TypeRef(bytes))
    assert not is_collection(TypeRef(Priority))
    assert is_collection(TypeRef(list[int]))
    assert is_collection(TypeRef(tuple[int, ...]))
    assert is_collection(TypeRef(TagList))


def test_mappings_are_dictionaries_not_collections() -> None:
    assert is_dictionary(TypeRef(dict[str, int]))
    assert is_dictionary(TypeRef(dict))
    assert is_dictionary(TypeRef(Registry))
    assert not is_collection(TypeRef(dict[str, int]))
    assert not is_collection(TypeRef(Registry))


def test_custom_generic_excludes_builtin_shapes() -> None:
    assert is_custom_generic(TypeRef(Box[str]))
    assert is_custom_generic(TypeRef(Box))
    assert not is_custom_generic(TypeRef(list[str]))
    assert not is_custom_generic(TypeRef(dict[str, int]))
    assert not is_custom_generic(TypeRef(Callable[[int], str]))


def test_flatten_unwraps_nested_collections() -> None:
    assert flatten(TypeRef(list[list[Tag]])) == TypeRef(Tag)
    assert flatten(TypeRef(TagList)) == TypeRef(Tag)
    assert normalize(Optional[list[Optional[Note]]]) == TypeRef(Note)
    assert normalize(None) is None


def test_valid_graph_members() -> None:
    assert is_valid_graph_member(normalize(Note))
    assert is_valid_graph_member(normalize(Priority))
    assert is_valid_graph_member(normalize(list[Inventory]))
    assert is_valid_graph_member(normalize(Box[Tag]))


def test_invalid_graph_members() -> None:
    assert not is_valid_graph_member(None)
    assert not is_valid_graph_member(normalize(int))
    assert not is_valid_graph_member(normalize(list[str]))
    assert not is_valid_graph_member(normalize(dict[str, Note]))
    assert not is_valid_graph_member(normalize(Registry))
    assert not is_valid_graph_member(normalize(_Hidden))
    assert not is_valid_graph_member(normalize(Any))
    assert not is_valid_graph_member(normalize(Callable[[int], str]))


def test_declared_iterable_bases_make_collections() -> None:
    assert is_collection(TypeRef(TagStream))
    assert is_collection(TypeRef(UntypedStream))
    assert flatten(TypeRef(TagStream)) == TypeRef(Tag)


def test_structurally_iterable_models_are_not_collections() -> None:
    assert not is_collection(TypeRef(Author))
    assert is_valid_graph_member(normalize(Author))


def test_counters_are_dictionaries() -> None:
    assert is_dictionary(TypeRef(WordCounts))
    assert not is_collection(TypeRef(WordCounts))
