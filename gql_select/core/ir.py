"""Intermediate Representation (IR) for GraphQL type graphs.

This module defines immutable dataclasses describing the parts of a
GraphQL schema that selection generation and query serialization need:
named types, their fields and arguments, wrapper chains and abstract
type membership. Instances are never mutated after construction, so a
TypeGraph can be cached and shared between callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

BUILTIN_SCALARS = frozenset({"ID", "String", "Int", "Float", "Boolean"})

OPERATION_TYPES = ("query", "mutation", "subscription")


class TypeKind(Enum):
    """Kinds of named GraphQL types."""
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    SCALAR = "scalar"
    ENUM = "enum"
    INPUT_OBJECT = "input_object"


class RefKind(Enum):
    """Links of a wrapped type chain."""
    NAMED = "named"
    LIST = "list"
    NON_NULL = "non_null"


def _freeze(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class TypeRef:
    """A (possibly wrapped) reference to a named type.

    [User!]! is NON_NULL(LIST(NON_NULL(NAMED("User")))).
    """
    kind: RefKind
    name: str | None = None
    of_type: "TypeRef | None" = None

    @classmethod
    def named(cls, name: str) -> "TypeRef":
        return cls(RefKind.NAMED, name=name)

    @classmethod
    def list_of(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(RefKind.LIST, of_type=of_type)

    @classmethod
    def non_null(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(RefKind.NON_NULL, of_type=of_type)

    @property
    def named_type(self) -> str:
        """Name of the type at the end of the wrapper chain."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref.name

    @property
    def is_non_null(self) -> bool:
        return self.kind is RefKind.NON_NULL

    @property
    def is_list(self) -> bool:
        """True if a list wrapper appears anywhere in the chain."""
        ref = self
        while ref is not None:
            if ref.kind is RefKind.LIST:
                return True
            ref = ref.of_type
        return False

    def __str__(self) -> str:
        if self.kind is RefKind.NON_NULL:
            return f"{self.of_type}!"
        if self.kind is RefKind.LIST:
            return f"[{self.of_type}]"
        return self.name


@dataclass(frozen=True)
class IRArgument:
    """Represents an argument to a field."""
    name: str
    type: TypeRef
    has_default: bool = False
    default_value: Any = None
    description: str | None = None

    @property
    def type_name(self) -> str:
        return self.type.named_type

    @property
    def is_required(self) -> bool:
        """Non-null arguments without a default must be supplied."""
        return self.type.is_non_null and not self.has_default


@dataclass(frozen=True)
class IRField:
    """Represents a field of an object, interface or input type."""
    name: str
    type: TypeRef
    arguments: Mapping[str, IRArgument] = field(default_factory=dict)
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "arguments", _freeze(self.arguments))

    @property
    def type_name(self) -> str:
        return self.type.named_type

    @property
    def required_arguments(self) -> list[IRArgument]:
        return [arg for arg in self.arguments.values() if arg.is_required]


@dataclass(frozen=True)
class IRType:
    """Represents a named GraphQL type of any kind.

    `fields` is populated for objects, interfaces and input objects,
    `possible_types` for unions (members) and interfaces (implementing
    object types), `enum_values` for enums.
    """
    name: str
    kind: TypeKind
    fields: Mapping[str, IRField] = field(default_factory=dict)
    interfaces: tuple[str, ...] = ()
    possible_types: tuple[str, ...] = ()
    enum_values: tuple[str, ...] = ()
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "fields", _freeze(self.fields))
        object.__setattr__(self, "interfaces", tuple(self.interfaces))
        object.__setattr__(self, "possible_types", tuple(self.possible_types))
        object.__setattr__(self, "enum_values", tuple(self.enum_values))

    @property
    def is_composite(self) -> bool:
        """True for types that take a selection set."""
        return self.kind in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)

    @property
    def is_abstract(self) -> bool:
        return self.kind in (TypeKind.INTERFACE, TypeKind.UNION)

    @property
    def is_leaf(self) -> bool:
        return self.kind in (TypeKind.SCALAR, TypeKind.ENUM)


@dataclass(frozen=True)
class TypeGraph:
    """Complete, read-only type graph of a schema."""
    types: Mapping[str, IRType] = field(default_factory=dict)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "types", _freeze(self.types))

    def get_type(self, name: str) -> IRType | None:
        """Look up a named type. Unknown built-in scalars resolve too."""
        ir_type = self.types.get(name)
        if ir_type is None and name in BUILTIN_SCALARS:
            return IRType(name=name, kind=TypeKind.SCALAR)
        return ir_type

    def root_type_name(self, operation_type: str) -> str | None:
        """Return the root type name for query, mutation or subscription."""
        if operation_type == "query":
            return self.query_type
        if operation_type == "mutation":
            return self.mutation_type
        if operation_type == "subscription":
            return self.subscription_type
        return None

    def possible_types(self, name: str) -> list[IRType]:
        """Return the concrete object types behind an interface or union."""
        ir_type = self.types.get(name)
        if ir_type is None:
            return []
        return [
            self.types[member]
            for member in ir_type.possible_types
            if member in self.types
        ]

    def __len__(self) -> int:
        return len(self.types)
