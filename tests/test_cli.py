"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from conftest import TEST_SCHEMA, normalize
from gql_select.cli import main
from gql_select.core.api import create_selection


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(TEST_SCHEMA)
    return str(path)


@pytest.fixture
def selection_file(tmp_path):
    path = tmp_path / "selection.json"
    path.write_text(json.dumps({"user": {"id": True, "name": True}}))
    return str(path)


class TestSelectionCommand:
    """Tests for `gql-select selection`."""

    def test_prints_tree(self, runner, schema_file):
        result = runner.invoke(main, ["selection", "-s", schema_file])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == create_selection(TEST_SCHEMA)

    def test_typename_flag(self, runner, schema_file):
        result = runner.invoke(main, ["selection", "-s", schema_file, "--typename"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["search"]["__typename"] is False

    def test_root_option(self, runner, schema_file):
        result = runner.invoke(main, ["selection", "-s", schema_file, "--root", "Mutation"])
        assert result.exit_code == 0, result.output
        assert set(json.loads(result.stdout)) == {"createUser", "updateUser"}

    def test_bad_root(self, runner, schema_file):
        result = runner.invoke(main, ["selection", "-s", schema_file, "--root", "Node"])
        assert result.exit_code == 1
        assert "must be an object type" in result.output

    def test_invalid_schema(self, runner, tmp_path):
        path = tmp_path / "broken.graphql"
        path.write_text("type Query { user: Missing }")
        result = runner.invoke(main, ["selection", "-s", str(path)])
        assert result.exit_code == 1
        assert "Invalid schema" in result.output

    def test_verbose(self, runner, schema_file):
        result = runner.invoke(main, ["selection", "-s", schema_file, "-v"])
        assert result.exit_code == 0, result.output
        assert "Types:" in result.output


class TestBuildCommand:
    """Tests for `gql-select build`."""

    def test_builds_query(self, runner, schema_file, selection_file):
        result = runner.invoke(main, ["build", "-s", schema_file, "-t", selection_file])
        assert result.exit_code == 0, result.output
        assert normalize(result.stdout) == "query { user { id name } }"

    def test_selection_from_stdin(self, runner, schema_file):
        result = runner.invoke(
            main,
            ["build", "-s", schema_file, "-t", "-"],
            input=json.dumps({"users": {"email": True}}),
        )
        assert result.exit_code == 0, result.output
        assert normalize(result.stdout) == "query { users { email } }"

    def test_mutation_with_name(self, runner, schema_file, tmp_path):
        path = tmp_path / "mutation.json"
        path.write_text(json.dumps({"createUser": {"id": True}}))
        result = runner.invoke(
            main,
            ["build", "-s", schema_file, "-t", str(path), "-o", "mutation", "-n", "CreateNewUser"],
        )
        assert result.exit_code == 0, result.output
        assert normalize(result.stdout) == "mutation CreateNewUser { createUser { id } }"

    def test_default_args(self, runner, schema_file, tmp_path):
        path = tmp_path / "search.json"
        path.write_text(json.dumps({"search": {"on_User": {"id": True}}}))
        result = runner.invoke(
            main, ["build", "-s", schema_file, "-t", str(path), "--default-args"]
        )
        assert result.exit_code == 0, result.output
        assert 'search(term: "default")' in result.stdout

    def test_unsupported_operation(self, runner, schema_file, selection_file):
        result = runner.invoke(
            main, ["build", "-s", schema_file, "-t", selection_file, "-o", "invalid"]
        )
        assert result.exit_code == 2

    def test_missing_root(self, runner, schema_file, selection_file):
        result = runner.invoke(
            main, ["build", "-s", schema_file, "-t", selection_file, "-o", "subscription"]
        )
        assert result.exit_code == 1
        assert "No subscription type found in schema." in result.output

    def test_invalid_json(self, runner, schema_file, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(main, ["build", "-s", schema_file, "-t", str(path)])
        assert result.exit_code == 1
        assert "Invalid selection JSON" in result.output

    def test_selection_not_an_object(self, runner, schema_file, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        result = runner.invoke(main, ["build", "-s", schema_file, "-t", str(path)])
        assert result.exit_code == 1
        assert "Selection tree must be a mapping" in result.output
