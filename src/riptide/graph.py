"""Discover every custom type reachable from a set of root types."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from riptide.classify import is_custom_generic, is_dictionary, is_valid_graph_member, normalize
from riptide.typeref import TypeRef


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeDescriptor:
    """Normalized identity of a type: nullable-unwrapped and collection-flattened."""
    type_ref: TypeRef

    @property
    def name(self) -> str:
        return self.type_ref.name

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.type_ref.full_name})"


def descriptor_for(annotation: Any) -> Optional[TypeDescriptor]:
    """Normalize an annotation into a graph node, or None if it may not be one."""
    normalized = normalize(annotation)
    if not is_valid_graph_member(normalized):
        return None
    return TypeDescriptor(normalized)


class TypeGraph:
    """Ordered set of type descriptors; insertion order is emission order."""

    def __init__(self) -> None:
        self._descriptors: dict[TypeDescriptor, None] = {}

    def add(self, descriptor: TypeDescriptor) -> bool:
        """Insert a descriptor; returns False if it was already present."""
        if descriptor in self._descriptors:
            return False
        self._descriptors[descriptor] = None
        return True

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._descriptors

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def descriptors(self) -> list[TypeDescriptor]:
        return list(self._descriptors)

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self._descriptors]


def nested_generic_types(type_ref: TypeRef) -> list[TypeRef]:
    """Generic arguments of a type, depth first, followed by the type itself if it is a custom generic."""
    found_types: list[TypeRef] = []
    if not type_ref.is_generic:
        return found_types

    for argument in type_ref.generic_args:
        found_types.append(argument)
        found_types.extend(nested_generic_types(argument))

    if is_custom_generic(type_ref):
        found_types.append(type_ref)
    return found_types


def distinct_property_types(type_ref: TypeRef) -> list[TypeRef]:
    """Declared property types in declaration order, without repeats."""
    return list(dict.fromkeys(descriptor.type_ref for descriptor in type_ref.properties()))


def discover(roots: Iterable[Any]) -> TypeGraph:
    """Return the custom types reachable from `roots` in breadth-first discovery order.

    Roots that are None or not valid graph members are skipped.
    """
    graph = TypeGraph()
    pending: deque[TypeDescriptor] = deque()

    def visit(candidate: Any) -> None:
        """Queue a candidate if it normalizes to a new valid descriptor."""
        descriptor = descriptor_for(candidate)
        if descriptor is None:
            # maps are never nodes, but their key and value types can be
            normalized = normalize(candidate)
            if normalized is not None and is_dictionary(normalized):
                for argument in normalized.mapping_arguments() or ():
                    visit(argument)
            return
        if graph.add(descriptor):
            pending.append(descriptor)

    for root in roots:
        if root is None:
            logger.debug("Skipping missing root type")
            continue
        visit(root)

    while pending:
        type_ref = pending.popleft().type_ref

        if type_ref.is_generic:
            for generic_type in nested_generic_types(type_ref):
                visit(generic_type)

        for property_type in distinct_property_types(type_ref):
            visit(property_type)

    logger.debug("Discovered %d types", len(graph))
    return graph
