"""Reflection handle over Python runtime type annotations.

`TypeRef` answers the questions the projector and the graph walker ask about a
type (its name, generic arguments, enum-ness, nullability, element type,
declared properties, implemented mapping/iterable bases) without the rest of
the engine touching `typing` internals directly.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import functools
import inspect
import logging
import sys
import sysconfig
import types
import typing
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)

NONE_TYPE = type(None)

KNOWN_FRAMEWORK_ROOTS: frozenset[str] = frozenset({"builtins", "pydantic", "pydantic_core", "typing_extensions"})

STDLIB_DIRECTORY = Path(sysconfig.get_paths()["stdlib"]).resolve()
SITE_DIRECTORIES = tuple(
    Path(sysconfig.get_paths()[scheme_key]).resolve() for scheme_key in ("purelib", "platlib")
)


@functools.lru_cache(maxsize=None)
def _is_stdlib_file(module_file: str) -> bool:
    resolved_file = Path(module_file).resolve()
    if any(resolved_file.is_relative_to(site_directory) for site_directory in SITE_DIRECTORIES):
        return False
    return resolved_file.is_relative_to(STDLIB_DIRECTORY)


def is_framework_module(module_name: str) -> bool:
    """Whether a module belongs to the interpreter, the standard library, or a known framework.

    A top-level name shared with the standard library only counts when the
    imported module actually lives in the interpreter's stdlib directory, so a
    user package called `calendar` stays a user package.
    """
    root_name = module_name.split(".", 1)[0]
    if root_name in KNOWN_FRAMEWORK_ROOTS:
        return True
    if root_name not in sys.stdlib_module_names:
        return False
    root_module = sys.modules.get(root_name)
    if root_module is None:
        return False
    module_file = getattr(root_module, "__file__", None)
    # built-in and frozen modules have no file
    return module_file is None or _is_stdlib_file(module_file)


# ============================================================
# Annotation helpers
# ============================================================

def unwrap_annotation(annotation: Any) -> Any:
    """Strip `Annotated[...]` metadata and `NewType` wrappers."""
    while True:
        if typing.get_origin(annotation) is typing.Annotated:
            annotation = annotation.__origin__
            continue
        supertype = getattr(annotation, "__supertype__", None)
        if supertype is not None:
            annotation = supertype
            continue
        return annotation


def strip_arity(name: str) -> str:
    """Drop a parameterisation suffix: pydantic names generic models `Box[str]`."""
    return name.split("[", 1)[0]


def substitute(annotation: Any, bindings: dict[Any, Any]) -> Any:
    """Replace bound type variables inside an annotation."""
    if not bindings:
        return annotation
    if isinstance(annotation, typing.TypeVar):
        return bindings.get(annotation, annotation)

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return typing.Union[tuple(substitute(member, bindings) for member in typing.get_args(annotation))]

    parameters = getattr(annotation, "__parameters__", ())
    if parameters and not isinstance(annotation, type):
        return annotation[tuple(bindings.get(parameter, parameter) for parameter in parameters)]
    return annotation


def _pydantic_generic_metadata(annotation: Any) -> dict[str, Any]:
    """Generic metadata pydantic attaches to generic models and their parameterisations."""
    if not isinstance(annotation, type):
        return {}
    return getattr(annotation, "__pydantic_generic_metadata__", None) or {}


def _is_class_var(hint: Any) -> bool:
    return hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar


def _is_framework_class(klass: type) -> bool:
    return is_framework_module(klass.__module__)


def _resolved_field_hints(klass: type) -> dict[str, Any]:
    """Annotated instance fields of a class, base classes first."""
    model_fields = getattr(klass, "model_fields", None)
    if isinstance(model_fields, dict):
        # pydantic models: field annotations are already resolved (and parameterised)
        return {field_name: field_info.annotation for field_name, field_info in model_fields.items()}

    try:
        return typing.get_type_hints(klass)
    except (NameError, TypeError) as resolution_error:
        logger.warning(
            "Cannot resolve annotations of %s.%s (%s); unresolved fields fall back to 'any'",
            klass.__module__,
            klass.__qualname__,
            resolution_error,
        )

    raw_hints: dict[str, Any] = {}
    for base_class in reversed(klass.__mro__):
        if _is_framework_class(base_class):
            continue
        for field_name, hint in inspect.get_annotations(base_class).items():
            raw_hints[field_name] = _resolve_single_hint(base_class, field_name, hint)
    return raw_hints


def _resolve_single_hint(base_class: type, field_name: str, hint: Any) -> Any:
    """Resolve one annotation of `base_class` through `typing`; a name that cannot be resolved stays a string."""
    if not isinstance(hint, str):
        return hint

    # a stand-in class holding only this annotation, resolved in the owner's module and namespace
    single_field_class = type(
        base_class.__name__,
        (),
        {"__module__": base_class.__module__, "__annotations__": {field_name: hint}},
    )
    try:
        return typing.get_type_hints(single_field_class, localns=dict(vars(base_class)))[field_name]
    except (NameError, AttributeError, SyntaxError, TypeError):
        return hint


def _getter_of(member: Any) -> Optional[Callable[..., Any]]:
    if isinstance(member, property):
        return member.fget
    if isinstance(member, functools.cached_property):
        return member.func
    return None


def _return_hint(getter: Callable[..., Any]) -> Any:
    try:
        return typing.get_type_hints(getter).get("return", typing.Any)
    except (NameError, TypeError):
        return getattr(getter, "__annotations__", {}).get("return", typing.Any)


# ============================================================
# TypeRef
# ============================================================

@dataclass(frozen=True)
class PropertyDescriptor:
    """A public readable instance property: its name and declared type."""
    name: str
    type_ref: "TypeRef"


@dataclass(frozen=True)
class TypeRef:
    """Handle to a type of the host (Python) type system."""
    annotation: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "annotation", unwrap_annotation(self.annotation))

    @classmethod
    def of(cls, annotation: Any) -> Optional["TypeRef"]:
        """Coerce an annotation (or an existing TypeRef) into a TypeRef; None stays None."""
        if annotation is None:
            return None
        if isinstance(annotation, TypeRef):
            return annotation
        return cls(annotation)

    def __repr__(self) -> str:
        return f"TypeRef({self.full_name})"

    # ---- identity ----

    @property
    def origin(self) -> Any:
        """The class behind a parameterised annotation, or the annotation itself."""
        metadata_origin = _pydantic_generic_metadata(self.annotation).get("origin")
        if metadata_origin is not None:
            return metadata_origin
        return typing.get_origin(self.annotation) or self.annotation

    @property
    def name(self) -> str:
        if isinstance(self.annotation, typing.TypeVar):
            return self.annotation.__name__
        origin = self.origin
        for attribute_name in ("__name__", "_name"):
            value = getattr(origin, attribute_name, None)
            if isinstance(value, str):
                return value
        return repr(self.annotation)

    @property
    def module(self) -> str:
        if isinstance(self.annotation, typing.TypeVar):
            return ""
        module_name = getattr(self.origin, "__module__", None)
        return module_name if isinstance(module_name, str) else ""

    @property
    def full_name(self) -> str:
        if isinstance(self.annotation, type):
            return f"{self.annotation.__module__}.{self.annotation.__qualname__}"
        return repr(self.annotation)

    # ---- kind ----

    @property
    def is_class(self) -> bool:
        return isinstance(self.origin, type)

    @property
    def is_enum(self) -> bool:
        return isinstance(self.annotation, type) and issubclass(self.annotation, enum.Enum)

    @property
    def is_generic_parameter(self) -> bool:
        return isinstance(self.annotation, typing.TypeVar)

    @property
    def is_unresolved(self) -> bool:
        """A forward reference that could not be evaluated."""
        return isinstance(self.annotation, (str, typing.ForwardRef))

    @property
    def is_structural_dict(self) -> bool:
        """A `TypedDict`: a dict at runtime, a record with declared keys to the type checker."""
        return isinstance(self.origin, type) and typing.is_typeddict(self.origin)

    @property
    def is_primitive(self) -> bool:
        return self.module == "builtins"

    @property
    def is_framework(self) -> bool:
        """Defined by the standard library, the interpreter, or a known framework."""
        return is_framework_module(self.module)

    @property
    def is_public(self) -> bool:
        qualified_name = getattr(self.origin, "__qualname__", self.name)
        return not any(
            part.startswith("_") or part == "<locals>" for part in qualified_name.split(".")
        )

    # ---- nullability ----

    def _union_members(self) -> Optional[tuple[Any, ...]]:
        origin = typing.get_origin(self.annotation)
        if origin is typing.Union or origin is types.UnionType:
            return typing.get_args(self.annotation)
        return None

    @property
    def is_nullable(self) -> bool:
        return self.nullable_underlying() is not None

    def nullable_underlying(self) -> Optional["TypeRef"]:
        """The wrapped type of `Optional[X]` / `X | None`, else None."""
        members = self._union_members()
        if members is None or NONE_TYPE not in members:
            return None
        remaining = [member for member in members if member is not NONE_TYPE]
        if len(remaining) != 1:
            return None
        return TypeRef(remaining[0])

    # ---- generics ----

    def _concrete_arguments(self) -> tuple[Any, ...]:
        metadata = _pydantic_generic_metadata(self.annotation)
        if metadata.get("origin") is not None:
            return tuple(metadata.get("args", ()))
        if typing.get_origin(self.annotation) is None:
            return ()
        # Callable parameter lists are not types
        return tuple(argument for argument in typing.get_args(self.annotation) if not isinstance(argument, list))

    def _definition_parameters(self) -> tuple[Any, ...]:
        return tuple(getattr(self.origin, "__parameters__", ()) or ())

    @property
    def is_generic(self) -> bool:
        return self.is_class and bool(self._concrete_arguments() or self._definition_parameters())

    @property
    def generic_args(self) -> tuple["TypeRef", ...]:
        """Concrete arguments, or the definition's own parameters for an unbound generic."""
        arguments = self._concrete_arguments() or self._definition_parameters()
        return tuple(TypeRef(argument) for argument in arguments)

    @property
    def generic_parameters(self) -> tuple["TypeRef", ...]:
        """Type parameters of the generic definition behind this type."""
        return tuple(TypeRef(parameter) for parameter in self._definition_parameters())

    def definition(self) -> "TypeRef":
        """The unparameterised generic definition (`Box` for `Box[str]`)."""
        origin = self.origin
        return TypeRef(origin) if isinstance(origin, type) else self

    def typevar_bindings(self) -> dict[Any, Any]:
        """Type variables bound by this type, including those bound through generic bases."""
        origin = self.origin
        if not isinstance(origin, type):
            return {}

        bindings: dict[Any, Any] = dict(zip(self._definition_parameters(), self._concrete_arguments()))
        for klass in origin.__mro__:
            for base in vars(klass).get("__orig_bases__", ()):
                base_origin = typing.get_origin(base)
                base_parameters = getattr(base_origin, "__parameters__", ()) or ()
                for parameter, argument in zip(base_parameters, typing.get_args(base)):
                    bindings.setdefault(parameter, substitute(argument, bindings))
        return bindings

    def parameterised_base_arguments(self, base_predicate: Callable[[type], bool], arity: int) -> Optional[tuple["TypeRef", ...]]:
        """Arguments of the first parameterised base (or self) whose origin matches the predicate."""
        origin = self.origin
        if not isinstance(origin, type):
            return None

        own_arguments = self._concrete_arguments()
        if len(own_arguments) == arity and base_predicate(origin) and _is_framework_class(origin):
            return tuple(TypeRef(argument) for argument in own_arguments)

        bindings = self.typevar_bindings()
        for klass in origin.__mro__:
            for base in vars(klass).get("__orig_bases__", ()):
                base_origin = typing.get_origin(base)
                base_arguments = typing.get_args(base)
                if isinstance(base_origin, type) and base_predicate(base_origin) and len(base_arguments) == arity:
                    return tuple(TypeRef(substitute(argument, bindings)) for argument in base_arguments)
        return None

    # ---- interfaces ----

    @property
    def implements_mapping(self) -> bool:
        origin = self.origin
        if self.is_structural_dict:
            return False
        return isinstance(origin, type) and issubclass(origin, collections.abc.Mapping)

    @property
    def implements_iterable(self) -> bool:
        origin = self.origin
        if not isinstance(origin, type) or self.is_structural_dict:
            return False
        if issubclass(origin, collections.abc.Collection):
            return True
        if origin.__module__ == "collections.abc" and issubclass(origin, collections.abc.Iterable):
            return True
        # nominal bases only; a structural __iter__ (pydantic models) does not count
        return collections.abc.Iterable in origin.__mro__

    def mapping_arguments(self) -> Optional[tuple["TypeRef", "TypeRef"]]:
        """Key and value types of a typed mapping; None for an untyped one."""
        origin = self.origin
        if isinstance(origin, type) and issubclass(origin, collections.Counter):
            counted = self.parameterised_base_arguments(
                lambda candidate: issubclass(candidate, collections.Counter), 1
            )
            return (counted[0], TypeRef(int)) if counted else None

        arguments = self.parameterised_base_arguments(
            lambda candidate: issubclass(candidate, collections.abc.Mapping), 2
        )
        if arguments is None:
            return None
        key_type, value_type = arguments
        return key_type, value_type

    def iterable_element(self) -> Optional["TypeRef"]:
        """Element type of a typed iterable; None when only the untyped protocol is known."""
        if self.origin is tuple:
            tuple_arguments = [argument for argument in typing.get_args(self.annotation) if argument is not Ellipsis]
            if tuple_arguments and all(argument == tuple_arguments[0] for argument in tuple_arguments):
                return TypeRef(tuple_arguments[0])
            return None

        arguments = self.parameterised_base_arguments(
            lambda candidate: issubclass(candidate, collections.abc.Iterable), 1
        )
        return arguments[0] if arguments else None

    # ---- members ----

    def properties(self) -> list[PropertyDescriptor]:
        """Public readable instance properties across the class hierarchy, de-duplicated by name."""
        origin = self.origin
        if not isinstance(origin, type) or issubclass(origin, enum.Enum):
            return []

        declared_hints: dict[str, Any] = {}
        for field_name, hint in _resolved_field_hints(origin).items():
            if field_name.startswith("_") or _is_class_var(hint) or isinstance(hint, dataclasses.InitVar):
                continue
            declared_hints[field_name] = hint

        for klass in reversed(origin.__mro__):
            if _is_framework_class(klass):
                continue
            for member_name, member in vars(klass).items():
                getter = _getter_of(member)
                if getter is None or member_name.startswith("_"):
                    continue
                declared_hints[member_name] = _return_hint(getter)

        bindings = self.typevar_bindings()
        return [
            PropertyDescriptor(name=property_name, type_ref=TypeRef(substitute(hint, bindings)))
            for property_name, hint in declared_hints.items()
        ]
