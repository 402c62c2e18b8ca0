"""Selection trees and the entry variants the serializer works with.

A selection tree is plain data: a dict mapping field names to booleans
(leaf toggles) or to nested dicts (object fields and, under an
`on_<TypeName>` key, inline fragment branches). It never references the
TypeGraph it was generated from, so it can be copied, edited, dumped to
JSON and serialized again.

When the serializer visits an entry it classifies it once against the
TypeGraph into one of the variants below.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .errors import InputTypeError
from .ir import IRField, IRType

FRAGMENT_PREFIX = "on_"
TYPENAME_FIELD = "__typename"

SelectionTree = dict[str, Union[bool, "SelectionTree"]]


def fragment_key(type_name: str) -> str:
    """Return the tree key holding the inline fragment for type_name."""
    return f"{FRAGMENT_PREFIX}{type_name}"


def fragment_type_name(key: str) -> str | None:
    """Return the type name behind a fragment key, or None."""
    if key.startswith(FRAGMENT_PREFIX) and len(key) > len(FRAGMENT_PREFIX):
        return key[len(FRAGMENT_PREFIX):]
    return None


@dataclass(frozen=True)
class Leaf:
    """A scalar/enum field or `__typename`."""
    name: str
    selected: bool
    field: IRField | None = None


@dataclass(frozen=True)
class Node:
    """An object-typed field with a nested selection."""
    name: str
    field: IRField
    type: IRType
    selection: Mapping[str, Any]


@dataclass(frozen=True)
class Fragment:
    """An interface/union-typed field; its body may hold `on_<Type>` branches."""
    name: str
    field: IRField
    type: IRType
    selection: Mapping[str, Any]


@dataclass(frozen=True)
class Skip:
    """An entry with no usable schema counterpart."""
    name: str
    reason: str


Entry = Union[Leaf, Node, Fragment, Skip]


def validate_selection(selection: Any, path: str = "") -> None:
    """Check that selection is a well-formed selection tree.

    Raises:
        InputTypeError: If a level is not a mapping with string keys or a
            value is neither a bool nor a mapping
    """
    if not isinstance(selection, Mapping):
        if not path:
            raise InputTypeError("Selection tree must be a mapping")
        raise InputTypeError(f"Selection at '{path}' must be a mapping")

    for key, value in selection.items():
        if not isinstance(key, str):
            raise InputTypeError(f"Selection keys must be strings, got {key!r}")
        child = f"{path}.{key}" if path else key
        if isinstance(value, Mapping):
            validate_selection(value, child)
        elif not isinstance(value, bool):
            raise InputTypeError(
                f"Selection at '{child}' must be a bool or a mapping, "
                f"got {type(value).__name__}"
            )


def iter_leaves(selection: Mapping[str, Any], prefix: tuple[str, ...] = ()):
    """Yield (path, value) for every boolean leaf of a selection tree."""
    for key, value in selection.items():
        if isinstance(value, Mapping):
            yield from iter_leaves(value, prefix + (key,))
        else:
            yield prefix + (key,), value


def set_path(selection: SelectionTree, path: str | list[str], value: bool = True) -> None:
    """Set a leaf of a selection tree by dotted path, creating levels as needed.

    Example:
        set_path(tree, "user.address.city")
        set_path(tree, ["search", "on_User", "name"])
    """
    parts = path.split(".") if isinstance(path, str) else list(path)
    if not parts:
        raise ValueError("Path must not be empty")

    current = selection
    for part in parts[:-1]:
        nested = current.get(part)
        if not isinstance(nested, dict):
            nested = {}
            current[part] = nested
        current = nested
    current[parts[-1]] = value
