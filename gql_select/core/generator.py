"""Selection tree generator.

Walks a TypeGraph from a root operation type and produces a selection
tree with every reachable field set to False. Cycles are cut per branch:
the names of the types on the current path are passed down by value as a
tuple, so the same type may recur independently in sibling branches while
any single branch that revisits a type stops there.
"""

import logging
from enum import Enum
from typing import Any, Mapping

from .errors import SchemaError
from .ir import IRField, IRType, TypeGraph, TypeKind
from .options import Options
from .selection import TYPENAME_FIELD, SelectionTree, fragment_key

logger = logging.getLogger(__name__)


class FieldClass(Enum):
    """How the generator treats a field, decided from its named type."""
    LEAF = "leaf"            # scalar or enum
    OBJECT = "object"        # recurse into the object type
    ABSTRACT = "abstract"    # interface or union, expands into fragments
    CYCLE = "cycle"          # type already on the path, shallow fields only
    SKIP = "skip"            # type cannot be resolved in the graph


class SelectionGenerator:
    """Builds all-False selection trees from a TypeGraph."""

    def __init__(
        self,
        graph: TypeGraph,
        options: Options | Mapping[str, Any] | None = None,
    ):
        """Initialize with the type graph and generation options."""
        self.graph = graph
        self.options = Options.coerce(options)

    def generate(self, root_type_name: str | None = None) -> SelectionTree:
        """Generate the selection tree rooted at root_type_name.

        Args:
            root_type_name: Name of the root object type; defaults to the
                schema's query type

        Returns:
            A nested dict mirroring the type graph, every leaf False

        Raises:
            SchemaError: If the root does not resolve to an object type
                with fields
        """
        if root_type_name is None:
            root_type_name = self.graph.query_type
            if root_type_name is None:
                raise SchemaError("No query type found in schema.")

        root = self.graph.get_type(root_type_name)
        if root is None:
            raise SchemaError(f"Type '{root_type_name}' not found in schema.")
        if root.kind is not TypeKind.OBJECT or not root.fields:
            raise SchemaError(
                f"Root type '{root_type_name}' must be an object type with fields."
            )

        return self._expand_object(root, ())

    def classify(self, ir_field: IRField, path: tuple[str, ...]) -> tuple[FieldClass, IRType | None]:
        """Classify a field against the graph given the current path."""
        named = self.graph.get_type(ir_field.type_name)
        if named is None:
            return FieldClass.SKIP, None
        if named.name in path:
            return FieldClass.CYCLE, named
        if named.kind is TypeKind.OBJECT:
            return FieldClass.OBJECT, named
        if named.is_abstract:
            return FieldClass.ABSTRACT, named
        if named.is_leaf:
            return FieldClass.LEAF, named
        # Input objects never appear as output field types
        return FieldClass.SKIP, named

    def _field_value(self, ir_field: IRField, path: tuple[str, ...]) -> bool | SelectionTree:
        field_class, named = self.classify(ir_field, path)

        if field_class is FieldClass.OBJECT:
            return self._expand_object(named, path)
        if field_class is FieldClass.ABSTRACT:
            return self._expand_abstract(named, path)
        if field_class is FieldClass.CYCLE:
            logger.debug(
                "Cycle on %s at %s, using shallow fields",
                named.name, " > ".join(path),
            )
            return self._shallow(named)
        if field_class is FieldClass.SKIP:
            logger.debug(
                "Skipping expansion of field '%s' of unresolved type '%s'",
                ir_field.name, ir_field.type_name,
            )
        return False

    def _expand_object(self, ir_type: IRType, path: tuple[str, ...]) -> SelectionTree:
        """Return the recursive field set of an object type."""
        if ir_type.name in path:
            return self._shallow(ir_type)

        path = path + (ir_type.name,)
        return {
            name: self._field_value(ir_field, path)
            for name, ir_field in ir_type.fields.items()
        }

    def _expand_abstract(self, ir_type: IRType, path: tuple[str, ...]) -> SelectionTree:
        """Return the tree of an interface or union.

        Interfaces contribute their own fields; both kinds contribute one
        `on_<Type>` branch per concrete type, each expanded from the same
        path so sibling branches do not affect each other.

        Only the interface's own fields see the abstract type on the path.
        Member branches start from the incoming path; each member adds
        itself, which bounds recursion through the abstract type.
        """
        result: SelectionTree = {}
        if self.options.include_typename:
            result[TYPENAME_FIELD] = False

        if ir_type.kind is TypeKind.INTERFACE:
            field_path = path + (ir_type.name,)
            for name, ir_field in ir_type.fields.items():
                result[name] = self._field_value(ir_field, field_path)

        for member in self.graph.possible_types(ir_type.name):
            result[fragment_key(member.name)] = self._expand_object(member, path)

        return result

    def _shallow(self, ir_type: IRType) -> SelectionTree:
        """Return the type's own fields, all False, without recursing."""
        result: SelectionTree = {}
        if ir_type.is_abstract and self.options.include_typename:
            result[TYPENAME_FIELD] = False
        for name in ir_type.fields:
            result[name] = False
        return result


def generate(
    graph: TypeGraph,
    root_type_name: str | None = None,
    options: Options | Mapping[str, Any] | None = None,
) -> SelectionTree:
    """Generate an all-False selection tree for root_type_name."""
    return SelectionGenerator(graph, options).generate(root_type_name)
