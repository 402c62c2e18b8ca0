"""Query builder for GraphQL operations.

Serializes a selection tree into GraphQL query text, walking the tree and
the TypeGraph together. Interface and union fields become inline
fragments; entries the schema does not know about are skipped.
"""

import logging
import math
from typing import Any, Mapping

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NameNode,
    NullValueNode,
    ObjectFieldNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    print_ast,
)

from .errors import OperationError, ValidationError
from .hooks import ArgumentHook
from .ir import OPERATION_TYPES, IRField, IRType, TypeGraph, TypeKind
from .options import Options
from .selection import (
    TYPENAME_FIELD,
    Entry,
    Fragment,
    Leaf,
    Node,
    Skip,
    fragment_type_name,
    validate_selection,
)

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Builds GraphQL query strings from selection trees."""

    def __init__(
        self,
        graph: TypeGraph,
        argument_hook: ArgumentHook | None = None,
        indent: str = "  ",
    ):
        """Initialize with the type graph used for field lookups.

        Args:
            graph: The type graph the selection tree was generated from
            argument_hook: Optional hook supplying literal field arguments
            indent: Indentation unit for nested selections
        """
        self.graph = graph
        self.argument_hook = argument_hook
        self.indent = indent

    def build(
        self,
        selection: Mapping[str, Any],
        options: Options | Mapping[str, Any] | None = None,
        root_type_name: str | None = None,
    ) -> str:
        """Build a GraphQL operation string.

        Args:
            selection: The selection tree
            options: Operation type and name
            root_type_name: Explicit root type; defaults to the schema's
                root for options.operation_type

        Returns:
            Complete GraphQL operation string

        Raises:
            InputTypeError: If selection is not a well-formed selection tree
            OperationError: If the operation type is unsupported or its
                root type is absent from the schema
        """
        validate_selection(selection)
        options = Options.coerce(options)

        operation_type = options.operation_type
        if operation_type not in OPERATION_TYPES:
            raise OperationError(
                f"Unsupported operation type: {operation_type}", operation_type
            )

        if root_type_name is None:
            root_type_name = self.graph.root_type_name(operation_type)
        root = self.graph.get_type(root_type_name) if root_type_name else None
        if root is None or root.kind is not TypeKind.OBJECT:
            raise OperationError(
                f"No {operation_type} type found in schema.", operation_type
            )

        operation_name = options.validated_operation_name()
        header = f"{operation_type} {operation_name}" if operation_name else operation_type

        lines = self.build_selection_set(selection, root, depth=1)
        if not lines:
            return f"{header} {{}}"
        return "\n".join([f"{header} {{", *lines, "}"])

    def build_selection_set(
        self,
        selection: Mapping[str, Any],
        parent: IRType,
        depth: int = 1,
    ) -> list[str]:
        """Return the indented lines selecting from parent.

        Abstract types emit `__typename` first, then their own fields, then
        one inline fragment per `on_<Type>` branch. Object types emit
        entries in the tree's key order.
        """
        indent = self.indent * depth
        lines: list[str] = []

        if parent.is_abstract:
            if selection.get(TYPENAME_FIELD) is True:
                lines.append(f"{indent}{TYPENAME_FIELD}")
            for key, value in selection.items():
                if key == TYPENAME_FIELD or fragment_type_name(key):
                    continue
                lines.extend(self._entry_lines(self.classify(parent, key, value), parent, depth))
            for key, value in selection.items():
                type_name = fragment_type_name(key)
                if type_name:
                    lines.extend(self._fragment_lines(type_name, value, depth))
            return lines

        for key, value in selection.items():
            lines.extend(self._entry_lines(self.classify(parent, key, value), parent, depth))
        return lines

    def classify(self, parent: IRType, key: str, value: Any) -> Entry:
        """Classify one selection entry against the parent type."""
        if key == TYPENAME_FIELD:
            return Leaf(key, value is True)

        ir_field = parent.fields.get(key)
        if ir_field is None:
            return Skip(key, f"no field '{key}' on {parent.name}")

        named = self.graph.get_type(ir_field.type_name)
        if named is None:
            return Skip(key, f"type '{ir_field.type_name}' is not in the schema")

        if isinstance(value, Mapping):
            if named.kind is TypeKind.OBJECT:
                return Node(key, ir_field, named, value)
            if named.is_abstract:
                return Fragment(key, ir_field, named, value)
            return Skip(key, f"{named.name} takes no selection set")

        if named.is_composite:
            if value:
                return Skip(key, f"{named.name} requires a selection set")
            return Leaf(key, False, ir_field)
        return Leaf(key, value is True, ir_field)

    def _entry_lines(self, entry: Entry, parent: IRType, depth: int) -> list[str]:
        indent = self.indent * depth

        if isinstance(entry, Skip):
            logger.debug("Skipping '%s': %s", entry.name, entry.reason)
            return []

        if isinstance(entry, Leaf):
            if not entry.selected:
                return []
            if entry.field is None:
                return [f"{indent}{entry.name}"]
            return [f"{indent}{entry.name}{self._format_arguments(parent, entry.field)}"]

        head = f"{indent}{entry.name}{self._format_arguments(parent, entry.field)}"
        inner = self.build_selection_set(entry.selection, entry.type, depth + 1)
        if not inner:
            # Keep touched fields visible even when nothing below them is selected
            return [f"{head} {{}}"]
        return [f"{head} {{", *inner, f"{indent}}}"]

    def _fragment_lines(self, type_name: str, value: Any, depth: int) -> list[str]:
        if not isinstance(value, Mapping):
            return []

        fragment_type = self.graph.get_type(type_name)
        if fragment_type is None or not fragment_type.is_composite:
            logger.debug("Skipping fragment on unknown type '%s'", type_name)
            return []

        indent = self.indent * depth
        inner = self.build_selection_set(value, fragment_type, depth + 1)
        if not inner:
            return []
        return [f"{indent}... on {type_name} {{", *inner, f"{indent}}}"]

    def _format_arguments(self, parent: IRType, ir_field: IRField) -> str:
        """Render hook-supplied arguments as `(name: literal, ...)`."""
        if self.argument_hook is None:
            return ""

        values = self.argument_hook.field_arguments(parent, ir_field)
        if not values:
            return ""

        parts = []
        for name, value in values.items():
            arg = ir_field.arguments.get(name)
            if arg is None:
                logger.debug("Ignoring unknown argument '%s' on %s.%s", name, parent.name, ir_field.name)
                continue
            parts.append(f"{name}: {print_ast(self._value_node(value, arg.type_name))}")

        if not parts:
            return ""
        return f"({', '.join(parts)})"

    def _value_node(self, value: Any, type_name: str | None) -> ValueNode:
        """Convert a Python value into a GraphQL literal node."""
        if value is None:
            return NullValueNode()
        if isinstance(value, bool):
            return BooleanValueNode(value=value)
        if isinstance(value, int):
            return IntValueNode(value=str(value))
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValidationError(f"Cannot write {value!r} as a GraphQL Float literal")
            return FloatValueNode(value=repr(value))
        if isinstance(value, str):
            named = self.graph.get_type(type_name) if type_name else None
            if named is not None and named.kind is TypeKind.ENUM:
                return EnumValueNode(value=value)
            return StringValueNode(value=value)
        if isinstance(value, Mapping):
            input_type = self.graph.get_type(type_name) if type_name else None
            fields = []
            for key, item in value.items():
                item_field = input_type.fields.get(key) if input_type else None
                fields.append(
                    ObjectFieldNode(
                        name=NameNode(value=key),
                        value=self._value_node(item, item_field.type_name if item_field else None),
                    )
                )
            return ObjectValueNode(fields=tuple(fields))
        if isinstance(value, (list, tuple)):
            return ListValueNode(values=tuple(self._value_node(v, type_name) for v in value))
        return StringValueNode(value=str(value))


def serialize(
    graph: TypeGraph,
    root_type_name: str | None,
    selection: Mapping[str, Any],
    options: Options | Mapping[str, Any] | None = None,
    argument_hook: ArgumentHook | None = None,
) -> str:
    """Serialize selection against root_type_name into query text."""
    return QueryBuilder(graph, argument_hook).build(selection, options, root_type_name)
