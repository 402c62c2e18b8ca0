"""Command-line interface for gql-select."""

import json
import logging
from pathlib import Path

import click

from .core.errors import SelectionError
from .core.generator import SelectionGenerator
from .core.hooks import RequiredArgumentDefaults
from .core.ir import OPERATION_TYPES
from .core.options import Options
from .core.parser import SchemaLoader
from .core.query_builder import QueryBuilder


def configure_logging(verbose: bool):
    """Send library logs to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_graph(schema: str, verbose: bool):
    """Load the type graph, reporting failures as click errors."""
    schema_path = Path(schema).resolve()
    if verbose:
        click.echo(f"Schema: {schema_path}", err=True)
    try:
        graph = SchemaLoader(str(schema_path)).load()
    except SelectionError as e:
        raise click.ClickException(str(e)) from e
    if verbose:
        click.echo(f"  Types: {len(graph)}", err=True)
    return graph


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of .graphql/.graphqls files.",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(package_name="gql-select")
def main():
    """Build GraphQL queries from selection trees.

    Generate an all-false selection tree from a schema, toggle the fields
    you want, then turn it into query text.
    """
    pass


@main.command()
@schema_option
@click.option(
    "--typename",
    is_flag=True,
    help="Add a __typename leaf under every interface and union.",
)
@click.option(
    "--root",
    default=None,
    help="Root object type (default: the schema's query type).",
)
@verbose_option
def selection(schema: str, typename: bool, root: str | None, verbose: bool):
    """Print the selection tree of a schema as JSON.

    Examples:

        gql-select selection --schema ./schema.graphql > selection.json

        gql-select selection -s ./schema --typename --root Mutation
    """
    configure_logging(verbose)
    graph = load_graph(schema, verbose)

    try:
        tree = SelectionGenerator(graph, Options(include_typename=typename)).generate(root)
    except SelectionError as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(tree, indent=2))


@main.command()
@schema_option
@click.option(
    "--selection",
    "-t",
    "selection_file",
    required=True,
    type=click.File("r"),
    help="JSON file holding the selection tree ('-' for stdin).",
)
@click.option(
    "--operation",
    "-o",
    default="query",
    type=click.Choice(OPERATION_TYPES),
    help="Operation type (default: query).",
)
@click.option(
    "--name",
    "-n",
    default=None,
    help="Operation name.",
)
@click.option(
    "--default-args",
    is_flag=True,
    help="Fill required scalar arguments with example values.",
)
@verbose_option
def build(schema: str, selection_file, operation: str, name: str | None, default_args: bool, verbose: bool):
    """Build query text from a selection tree.

    Examples:

        gql-select build -s ./schema.graphql -t selection.json

        gql-select build -s ./schema -t sel.json -o mutation -n CreateUser
    """
    configure_logging(verbose)
    graph = load_graph(schema, verbose)

    try:
        tree = json.load(selection_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid selection JSON: {e}") from e

    argument_hook = RequiredArgumentDefaults(graph) if default_args else None
    options = Options(operation_type=operation, operation_name=name)

    try:
        query = QueryBuilder(graph, argument_hook).build(tree, options)
    except SelectionError as e:
        raise click.ClickException(str(e)) from e

    click.echo(query)


if __name__ == "__main__":
    main()
