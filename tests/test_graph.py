from __future__ import annotations

from typing import Optional

from fixture_types import Author, Box, Catalog, Inventory, Note, Priority, Shelf, Tag, TagStream, _Hidden
from riptide.classify import is_valid_graph_member
from riptide.graph import TypeDescriptor, TypeGraph, descriptor_for, discover
from riptide.typeref import TypeRef


def test_discovery_order_is_breadth_first() -> None:
    assert discover([Note]).names() == ["Note", "Priority", "Tag"]


def test_discovery_through_maps_collections_and_generics() -> None:
    graph = discover([Inventory])

    assert graph.names() == ["Inventory", "Note", "Box", "Tag", "Priority"]
    assert descriptor_for(Box[Tag]) in graph


def test_custom_mapping_and_collection_subclasses_are_seen_through() -> None:
    assert discover([Catalog]).names() == ["Catalog", "Tag"]


def test_invalid_and_missing_roots_are_skipped() -> None:
    graph = discover([None, int, list[str], _Hidden, dict[str, int], Optional[Priority]])
    assert graph.names() == ["Priority"]


def test_discovery_is_idempotent() -> None:
    first = discover([Inventory, Author])
    second = discover([*(descriptor.type_ref for descriptor in first), Inventory, Author])

    assert first.descriptors() == second.descriptors()


def test_discovered_graph_is_closed() -> None:
    graph = discover([Shelf, Author])

    for descriptor in graph:
        assert is_valid_graph_member(descriptor.type_ref)
        for property_descriptor in descriptor.type_ref.properties():
            property_node = descriptor_for(property_descriptor.type_ref)
            if property_node is not None:
                assert property_node in graph


def test_each_instantiation_is_its_own_node() -> None:
    graph = discover([Shelf])

    assert descriptor_for(Box[Tag]) in graph
    assert descriptor_for(Box[Note]) in graph


def test_graph_rejects_duplicates() -> None:
    graph = TypeGraph()
    assert graph.add(TypeDescriptor(TypeRef(Note)))
    assert not graph.add(TypeDescriptor(TypeRef(Note)))
    assert len(graph) == 1


def test_declared_iterables_are_flattened_to_their_elements() -> None:
    assert discover([TagStream]).names() == ["Tag"]
