"""Core modules for GraphQL selection trees and query building."""

from .api import (
    SelectionModifier,
    build_query,
    create_optimized_query,
    create_selection,
)
from .errors import (
    InputTypeError,
    OperationError,
    SchemaError,
    SelectionError,
    ValidationError,
)
from .generator import FieldClass, SelectionGenerator, generate
from .hooks import (
    ArgumentHook,
    ArgumentHookChain,
    RequiredArgumentDefaults,
    StaticArguments,
)
from .ir import (
    IRArgument,
    IRField,
    IRType,
    TypeGraph,
    TypeKind,
    TypeRef,
)
from .options import Options
from .parser import SchemaCache, SchemaLoader, load_schema, parse_schema
from .query_builder import QueryBuilder, serialize
from .selection import (
    FRAGMENT_PREFIX,
    TYPENAME_FIELD,
    Fragment,
    Leaf,
    Node,
    SelectionTree,
    Skip,
    fragment_key,
    set_path,
    validate_selection,
)

__all__ = [
    # Entry points
    "create_selection",
    "build_query",
    "create_optimized_query",
    "SelectionModifier",
    # Errors
    "SelectionError",
    "SchemaError",
    "ValidationError",
    "InputTypeError",
    "OperationError",
    # IR types
    "IRArgument",
    "IRField",
    "IRType",
    "TypeGraph",
    "TypeKind",
    "TypeRef",
    # Parser
    "SchemaCache",
    "SchemaLoader",
    "load_schema",
    "parse_schema",
    # Options
    "Options",
    # Selection trees
    "FRAGMENT_PREFIX",
    "TYPENAME_FIELD",
    "SelectionTree",
    "Leaf",
    "Node",
    "Fragment",
    "Skip",
    "fragment_key",
    "set_path",
    "validate_selection",
    # Generator
    "FieldClass",
    "SelectionGenerator",
    "generate",
    # Query Builder
    "QueryBuilder",
    "serialize",
    # Hooks
    "ArgumentHook",
    "ArgumentHookChain",
    "RequiredArgumentDefaults",
    "StaticArguments",
]
