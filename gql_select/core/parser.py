"""GraphQL schema parser using graphql-core.

Builds a GraphQLSchema from SDL text and converts it into an immutable
TypeGraph. Also collects schema files from disk and keeps a read-through
cache of already built graphs keyed by the raw SDL text.
"""

import logging
import os
import threading
from collections import OrderedDict

from graphql import (
    GraphQLEnumType,
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    Undefined,
    build_schema,
    value_from_ast,
)

from .errors import InputTypeError, SchemaError
from .ir import IRArgument, IRField, IRType, TypeGraph, TypeKind, TypeRef

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")


def parse_schema(sdl: str) -> TypeGraph:
    """Parse SDL text and return its TypeGraph.

    Raises:
        InputTypeError: If sdl is not a non-empty string
        SchemaError: If the SDL is not valid or references unknown types
    """
    if not isinstance(sdl, str) or not sdl:
        raise InputTypeError("Schema must be a valid SDL string")

    try:
        schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        logger.error("Error building schema: %s", e)
        raise SchemaError(f"Invalid schema: {e}", errors=str(e).split("\n\n")) from e

    return SchemaConverter(schema).convert()


class SchemaConverter:
    """Converts a graphql-core GraphQLSchema into a TypeGraph."""

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema

    def convert(self) -> TypeGraph:
        types = {}
        for name, named_type in self.schema.type_map.items():
            # Introspection types are not selectable through the tree
            if name.startswith("__"):
                continue
            types[name] = self._convert_type(named_type)

        return TypeGraph(
            types=types,
            query_type=self._root_name(self.schema.query_type),
            mutation_type=self._root_name(self.schema.mutation_type),
            subscription_type=self._root_name(self.schema.subscription_type),
        )

    @staticmethod
    def _root_name(root: GraphQLObjectType | None) -> str | None:
        return root.name if root is not None else None

    def _convert_type(self, named_type: GraphQLNamedType) -> IRType:
        name = named_type.name
        description = named_type.description

        if isinstance(named_type, GraphQLObjectType):
            return IRType(
                name=name,
                kind=TypeKind.OBJECT,
                fields=self._convert_fields(named_type.fields),
                interfaces=[i.name for i in named_type.interfaces],
                description=description,
            )
        if isinstance(named_type, GraphQLInterfaceType):
            return IRType(
                name=name,
                kind=TypeKind.INTERFACE,
                fields=self._convert_fields(named_type.fields),
                interfaces=[i.name for i in named_type.interfaces],
                possible_types=self._possible_type_names(named_type),
                description=description,
            )
        if isinstance(named_type, GraphQLUnionType):
            return IRType(
                name=name,
                kind=TypeKind.UNION,
                possible_types=[t.name for t in named_type.types],
                description=description,
            )
        if isinstance(named_type, GraphQLEnumType):
            return IRType(
                name=name,
                kind=TypeKind.ENUM,
                enum_values=list(named_type.values),
                description=description,
            )
        if isinstance(named_type, GraphQLInputObjectType):
            return IRType(
                name=name,
                kind=TypeKind.INPUT_OBJECT,
                fields={
                    field_name: IRField(
                        name=field_name,
                        type=self._type_ref(input_field.type),
                        description=input_field.description,
                    )
                    for field_name, input_field in named_type.fields.items()
                },
                description=description,
            )
        return IRType(name=name, kind=TypeKind.SCALAR, description=description)

    def _possible_type_names(self, abstract_type: GraphQLInterfaceType) -> list[str]:
        return [t.name for t in self.schema.get_possible_types(abstract_type)]

    def _convert_fields(self, fields) -> dict[str, IRField]:
        """Process field definitions into an IRField mapping."""
        result = {}
        for field_name, gql_field in fields.items():
            args = {}
            for arg_name, gql_arg in gql_field.args.items():
                default_value = self._default_value(gql_arg)
                has_default = default_value is not Undefined
                args[arg_name] = IRArgument(
                    name=arg_name,
                    type=self._type_ref(gql_arg.type),
                    has_default=has_default,
                    default_value=default_value if has_default else None,
                    description=gql_arg.description,
                )
            result[field_name] = IRField(
                name=field_name,
                type=self._type_ref(gql_field.type),
                arguments=args,
                description=gql_field.description,
            )
        return result

    @staticmethod
    def _default_value(gql_arg):
        """Return the argument's default as a Python value, or Undefined.

        graphql-core 3.2 keeps SDL defaults in `default_value`; 3.3 moves
        them to `default`, holding either a value or an unparsed literal.
        """
        if gql_arg.default_value is not Undefined:
            return gql_arg.default_value
        default = getattr(gql_arg, "default", None)
        if default is None:
            return Undefined
        literal = getattr(default, "literal", None)
        if literal is not None:
            return value_from_ast(literal, gql_arg.type)
        return getattr(default, "value", Undefined)

    def _type_ref(self, gql_type) -> TypeRef:
        """Mirror the NonNull/List wrapper chain of a graphql-core type."""
        if isinstance(gql_type, GraphQLNonNull):
            return TypeRef.non_null(self._type_ref(gql_type.of_type))
        if isinstance(gql_type, GraphQLList):
            return TypeRef.list_of(self._type_ref(gql_type.of_type))
        return TypeRef.named(gql_type.name)


class SchemaLoader:
    """Reads SDL from a schema file or a directory of schema files."""

    def __init__(self, schema_path: str):
        """Initialize a loader with a path to a schema file or directory."""
        self.schema_path = schema_path

    def read(self) -> str:
        """Return the concatenated SDL of every collected schema file."""
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaError(f"No schema files found in {self.schema_path}")

        parts = []
        for file_path in schema_files:
            with open(file_path, encoding="utf-8") as f:
                parts.append(f.read())
        logger.debug("Read %d schema file(s) from %s", len(parts), self.schema_path)
        return "\n".join(parts)

    def load(self) -> TypeGraph:
        """Read and parse the schema."""
        return parse_schema(self.read())

    def _collect_schema_files(self) -> list[str]:
        """Collect all GraphQL schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)


class SchemaCache:
    """Read-through cache of TypeGraphs keyed by raw SDL text.

    Cached graphs are immutable, so the same entry can back any number of
    concurrent generate/serialize calls. Parsing happens outside the lock;
    when two threads race on the same SDL the first inserted graph wins.
    """

    def __init__(self, max_entries: int = 128):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, TypeGraph] = OrderedDict()
        self._lock = threading.Lock()

    def load(self, sdl: str) -> TypeGraph:
        """Return the graph for sdl, parsing it on a miss."""
        if not isinstance(sdl, str):
            raise InputTypeError("Schema must be a valid SDL string")

        with self._lock:
            cached = self._entries.get(sdl)
        if cached is not None:
            logger.debug("Schema cache hit")
            return cached

        logger.debug("Schema cache miss, parsing %d characters of SDL", len(sdl))
        graph = parse_schema(sdl)

        with self._lock:
            existing = self._entries.get(sdl)
            if existing is not None:
                return existing
            self._entries[sdl] = graph
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return graph

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, sdl: object) -> bool:
        with self._lock:
            return sdl in self._entries


default_cache = SchemaCache()


def load_schema(sdl: str) -> TypeGraph:
    """Parse sdl through the shared default cache."""
    return default_cache.load(sdl)
