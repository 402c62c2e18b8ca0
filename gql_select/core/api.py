"""SDL-level entry points.

These functions take raw SDL text, load its TypeGraph through the shared
schema cache and run the generator and/or the serializer.

Example:
    sdl = "type Query { user: User } type User { id: ID! name: String! }"

    selection = create_selection(sdl)
    selection["user"]["id"] = True
    build_query(sdl, selection)
    # query {
    #   user {
    #     id
    #   }
    # }

    create_optimized_query(sdl, lambda s: s["user"].update(name=True))
"""

from typing import Any, Callable, Mapping

from .errors import InputTypeError
from .generator import SelectionGenerator
from .hooks import ArgumentHook, RequiredArgumentDefaults
from .ir import TypeGraph
from .options import Options
from .parser import SchemaCache, default_cache
from .query_builder import QueryBuilder
from .selection import SelectionTree

SelectionModifier = Callable[[SelectionTree], Any]


def _load(sdl: Any, cache: SchemaCache | None) -> TypeGraph:
    if not isinstance(sdl, str) or not sdl:
        raise InputTypeError("Schema must be a valid SDL string")
    if cache is None:
        cache = default_cache
    return cache.load(sdl)


def create_selection(
    sdl: str,
    options: Options | Mapping[str, Any] | None = None,
    *,
    cache: SchemaCache | None = None,
) -> SelectionTree:
    """Create the all-False selection tree for the schema's query type.

    Raises:
        InputTypeError: If sdl is not a non-empty string
        SchemaError: If the SDL is invalid or has no query type
    """
    options = Options.coerce(options)
    graph = _load(sdl, cache)
    return SelectionGenerator(graph, options).generate()


def build_query(
    sdl: str,
    selection: Mapping[str, Any],
    options: Options | Mapping[str, Any] | None = None,
    *,
    argument_hook: ArgumentHook | None = None,
    default_arguments: bool = False,
    cache: SchemaCache | None = None,
) -> str:
    """Build query text for selection against the schema.

    Args:
        sdl: GraphQL SDL text
        selection: Selection tree, typically from create_selection
        options: Operation type and name
        argument_hook: Optional hook supplying literal field arguments
        default_arguments: Fill required scalar arguments with example
            values (ignored when argument_hook is given)
        cache: Schema cache to use instead of the shared one

    Raises:
        InputTypeError: If sdl is not a string or selection is not a mapping
        SchemaError: If the SDL is invalid
        OperationError: If the requested operation root is absent
    """
    graph = _load(sdl, cache)
    if not isinstance(selection, Mapping):
        raise InputTypeError("Selection tree must be a mapping")

    if argument_hook is None and default_arguments:
        argument_hook = RequiredArgumentDefaults(graph)
    return QueryBuilder(graph, argument_hook).build(selection, options)


def create_optimized_query(
    sdl: str,
    modifier: SelectionModifier,
    options: Options | Mapping[str, Any] | None = None,
    *,
    argument_hook: ArgumentHook | None = None,
    default_arguments: bool = False,
    cache: SchemaCache | None = None,
) -> str:
    """Generate a selection tree, let modifier edit it, then build the query.

    The modifier edits the tree in place; if it returns a mapping, that
    mapping is serialized instead.

    Raises:
        InputTypeError: If modifier is not callable
    """
    if not callable(modifier):
        raise InputTypeError("Selection modifier must be callable")

    options = Options.coerce(options)
    selection = create_selection(sdl, options, cache=cache)
    result = modifier(selection)
    if isinstance(result, Mapping):
        selection = result

    return build_query(
        sdl,
        selection,
        options,
        argument_hook=argument_hook,
        default_arguments=default_arguments,
        cache=cache,
    )
