"""Tests for the schema parser, type graph and schema cache."""

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import SIMPLE_SCHEMA, TEST_SCHEMA
from gql_select.core.errors import InputTypeError, SchemaError
from gql_select.core.ir import RefKind, TypeKind, TypeRef
from gql_select.core.parser import SchemaCache, SchemaLoader, parse_schema


class TestParseSchema:
    """Tests for parse_schema."""

    def test_root_types(self, graph):
        assert graph.query_type == "Query"
        assert graph.mutation_type == "Mutation"
        assert graph.subscription_type is None

    def test_root_type_name_by_operation(self, graph):
        assert graph.root_type_name("query") == "Query"
        assert graph.root_type_name("mutation") == "Mutation"
        assert graph.root_type_name("subscription") is None
        assert graph.root_type_name("invalid") is None

    def test_custom_schema_definition(self):
        graph = parse_schema("""
            schema { query: RootQuery }
            type RootQuery { ping: String }
        """)
        assert graph.query_type == "RootQuery"

    def test_kinds(self, graph):
        assert graph.get_type("User").kind is TypeKind.OBJECT
        assert graph.get_type("Node").kind is TypeKind.INTERFACE
        assert graph.get_type("SearchResult").kind is TypeKind.UNION
        assert graph.get_type("UserInput").kind is TypeKind.INPUT_OBJECT
        assert graph.get_type("String").kind is TypeKind.SCALAR

    def test_introspection_types_excluded(self, graph):
        assert graph.get_type("__Schema") is None
        assert not any(name.startswith("__") for name in graph.types)

    def test_builtin_scalar_always_resolves(self, graph):
        # Int is not referenced by the schema but still resolves
        assert graph.get_type("Int").kind is TypeKind.SCALAR

    def test_wrapped_type_chain(self, graph):
        users = graph.get_type("Query").fields["users"]
        assert str(users.type) == "[User!]!"
        assert users.type.kind is RefKind.NON_NULL
        assert users.type.is_list
        assert users.type_name == "User"

        posts = graph.get_type("User").fields["posts"]
        assert str(posts.type) == "[Post!]"
        assert not posts.type.is_non_null

    def test_arguments(self, graph):
        node = graph.get_type("Query").fields["node"]
        arg = node.arguments["id"]
        assert arg.type_name == "ID"
        assert arg.is_required
        assert node.required_arguments == [arg]

    def test_argument_default_value(self):
        graph = parse_schema("type Query { users(limit: Int = 10): [String] }")
        arg = graph.get_type("Query").fields["users"].arguments["limit"]
        assert arg.has_default
        assert arg.default_value == 10
        assert not arg.is_required

    def test_non_null_argument_with_default(self):
        graph = parse_schema("""
            type Query { users(limit: Int! = 10, role: Role! = ADMIN, term: String!): [String] }
            enum Role { ADMIN USER }
        """)
        arguments = graph.get_type("Query").fields["users"].arguments
        assert arguments["limit"].has_default
        assert arguments["limit"].default_value == 10
        assert not arguments["limit"].is_required
        assert arguments["role"].has_default
        assert not arguments["role"].is_required
        assert arguments["term"].is_required
        assert [a.name for a in graph.get_type("Query").fields["users"].required_arguments] == ["term"]

    def test_union_members(self, graph):
        assert graph.get_type("SearchResult").possible_types == ("User", "Post")

    def test_interface_implementers(self, graph):
        names = {t.name for t in graph.possible_types("Product")}
        assert names == {"PhysicalProduct", "DigitalProduct"}
        assert graph.get_type("User").interfaces == ("Node",)

    def test_possible_types_of_unknown_type(self, graph):
        assert graph.possible_types("Missing") == []

    def test_enum_values(self):
        graph = parse_schema("""
            type Query { role: Role }
            enum Role { ADMIN USER GUEST }
        """)
        role = graph.get_type("Role")
        assert role.kind is TypeKind.ENUM
        assert role.enum_values == ("ADMIN", "USER", "GUEST")
        assert role.is_leaf

    def test_graph_is_immutable(self, graph):
        with pytest.raises(TypeError):
            graph.types["Extra"] = graph.get_type("User")
        with pytest.raises(TypeError):
            graph.get_type("User").fields["extra"] = None
        with pytest.raises(dataclasses.FrozenInstanceError):
            graph.get_type("User").name = "Renamed"

    def test_syntax_error(self):
        with pytest.raises(SchemaError, match="Invalid schema"):
            parse_schema("invalid schema")

    def test_unknown_type_reference(self):
        with pytest.raises(SchemaError) as exc_info:
            parse_schema("type Query { user: InvalidType }")
        assert "InvalidType" in str(exc_info.value)
        assert exc_info.value.errors

    def test_non_string_schema(self):
        with pytest.raises(InputTypeError, match="Schema must be a valid SDL string"):
            parse_schema(123)
        with pytest.raises(InputTypeError):
            parse_schema("")

    def test_whitespace_schema_is_unparsable(self):
        with pytest.raises(SchemaError, match="Invalid schema"):
            parse_schema("   \n  ")


class TestTypeRef:
    """Tests for TypeRef helpers."""

    def test_named(self):
        ref = TypeRef.named("User")
        assert str(ref) == "User"
        assert ref.named_type == "User"
        assert not ref.is_list

    def test_nested_lists(self):
        ref = TypeRef.list_of(TypeRef.non_null(TypeRef.list_of(TypeRef.named("Int"))))
        assert str(ref) == "[[Int]!]"
        assert ref.named_type == "Int"
        assert ref.is_list


class TestSchemaLoader:
    """Tests for SchemaLoader."""

    def test_single_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text(SIMPLE_SCHEMA)
        graph = SchemaLoader(str(path)).load()
        assert "User" in graph.types

    def test_directory(self, tmp_path):
        (tmp_path / "query.graphqls").write_text("type Query { account: Account }")
        nested = tmp_path / "types"
        nested.mkdir()
        (nested / "account.graphql").write_text("type Account { id: ID! }")
        (tmp_path / "README.txt").write_text("not a schema")

        graph = SchemaLoader(str(tmp_path)).load()
        assert graph.get_type("Account").fields["id"].type_name == "ID"

    def test_empty_directory(self, tmp_path):
        with pytest.raises(SchemaError, match="No schema files"):
            SchemaLoader(str(tmp_path)).read()


class TestSchemaCache:
    """Tests for SchemaCache."""

    def test_hit_returns_same_graph(self):
        cache = SchemaCache()
        first = cache.load(TEST_SCHEMA)
        second = cache.load(TEST_SCHEMA)
        assert first is second
        assert len(cache) == 1
        assert TEST_SCHEMA in cache

    def test_eviction(self):
        cache = SchemaCache(max_entries=2)
        schemas = [f"type Query {{ field{i}: String }}" for i in range(3)]
        for sdl in schemas:
            cache.load(sdl)
        assert len(cache) == 2
        assert schemas[0] not in cache
        assert schemas[2] in cache

    def test_invalid_schema_not_cached(self):
        cache = SchemaCache()
        with pytest.raises(SchemaError):
            cache.load("type Query { user: Missing }")
        assert len(cache) == 0

    def test_clear(self):
        cache = SchemaCache()
        cache.load(SIMPLE_SCHEMA)
        cache.clear()
        assert len(cache) == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            SchemaCache(max_entries=0)

    def test_non_string_key(self):
        with pytest.raises(InputTypeError):
            SchemaCache().load(None)

    def test_concurrent_loads_share_one_graph(self):
        cache = SchemaCache()
        with ThreadPoolExecutor(max_workers=8) as pool:
            graphs = list(pool.map(lambda _: cache.load(TEST_SCHEMA), range(32)))
        assert all(g is graphs[0] for g in graphs)
        assert len(cache) == 1
