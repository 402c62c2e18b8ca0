"""Argument hooks for query serialization.

Selection trees only describe which fields to select; they never carry
argument values. A hook lets the serializer attach literal arguments to
the fields it emits, for example to fill required arguments with example
values when generating sample queries.

Example usage:
    from gql_select.core.hooks import RequiredArgumentDefaults, StaticArguments

    # Fill every required scalar argument with an example value
    builder = QueryBuilder(graph, argument_hook=RequiredArgumentDefaults())

    # Fixed arguments for specific fields
    class OnlyFirstTen:
        def field_arguments(self, parent, field):
            if "first" in field.arguments:
                return {"first": 10}
            return None
"""

from typing import Any, Mapping, Protocol, runtime_checkable

from .ir import IRField, IRType, TypeGraph, TypeKind

DEFAULT_SCALAR_VALUES: dict[str, Any] = {
    "ID": "1",
    "String": "default",
    "Int": 0,
    "Float": 0.0,
    "Boolean": False,
}


@runtime_checkable
class ArgumentHook(Protocol):
    """Protocol for argument hooks.

    The serializer calls the hook for every field it emits. Returned values
    are Python values; the serializer renders them as GraphQL literals
    against each argument's declared type. Unknown argument names are
    ignored.

    Example:
        class LimitLists:
            def field_arguments(self, parent, field):
                if "limit" in field.arguments:
                    return {"limit": 5}
                return None
    """

    def field_arguments(self, parent: IRType, field: IRField) -> Mapping[str, Any] | None:
        """Return argument values for field of parent, or None.

        Args:
            parent: The type declaring the field
            field: The field being emitted

        Returns:
            Mapping of argument name to Python value
        """
        ...


class RequiredArgumentDefaults:
    """Built-in hook filling required scalar/enum arguments with examples.

    Required input-object arguments are left out; their values cannot be
    derived from a scalar table.

    Example:
        hook = RequiredArgumentDefaults(
            graph,
            field_overrides={"Query.search": {"term": "graphql"}},
            type_defaults={"DateTime": "2024-01-01T00:00:00Z"},
        )
    """

    def __init__(
        self,
        graph: TypeGraph | None = None,
        field_overrides: Mapping[str, Mapping[str, Any]] | None = None,
        type_defaults: Mapping[str, Any] | None = None,
        custom_scalar_default: Any = "default",
    ):
        self.graph = graph
        self.field_overrides = dict(field_overrides or {})
        self.type_defaults = {**DEFAULT_SCALAR_VALUES, **(type_defaults or {})}
        self.custom_scalar_default = custom_scalar_default

    def bind(self, graph: TypeGraph) -> "RequiredArgumentDefaults":
        """Attach the graph used to resolve enum and input types."""
        self.graph = graph
        return self

    def field_arguments(self, parent: IRType, field: IRField) -> dict[str, Any] | None:
        """Return example values for the required arguments of field."""
        overrides = self.field_overrides.get(f"{parent.name}.{field.name}", {})
        values = {}
        for arg in field.required_arguments:
            if arg.name in overrides:
                values[arg.name] = overrides[arg.name]
                continue
            value = self._example_value(arg.type_name)
            if value is not None:
                values[arg.name] = value
        # Explicit overrides may also set optional arguments
        for name, value in overrides.items():
            values.setdefault(name, value)
        return values or None

    def _example_value(self, type_name: str) -> Any:
        if type_name in self.type_defaults:
            return self.type_defaults[type_name]
        ir_type = self.graph.get_type(type_name) if self.graph else None
        if ir_type is None:
            return self.custom_scalar_default
        if ir_type.kind is TypeKind.ENUM:
            return ir_type.enum_values[0] if ir_type.enum_values else None
        if ir_type.kind is TypeKind.SCALAR:
            return self.custom_scalar_default
        return None


class StaticArguments:
    """Built-in hook returning fixed arguments keyed by 'Type.field'.

    Example:
        hook = StaticArguments({"Query.user": {"id": "42"}})
    """

    def __init__(self, arguments: Mapping[str, Mapping[str, Any]]):
        self.arguments = {key: dict(value) for key, value in arguments.items()}

    def field_arguments(self, parent: IRType, field: IRField) -> dict[str, Any] | None:
        return self.arguments.get(f"{parent.name}.{field.name}")


class ArgumentHookChain:
    """Runs a collection of argument hooks in order.

    Values from later hooks override values from earlier hooks.
    """

    def __init__(self, *hooks: ArgumentHook):
        self.hooks: list[ArgumentHook] = list(hooks)

    def add_hook(self, hook: ArgumentHook):
        """Add an argument hook."""
        self.hooks.append(hook)

    def field_arguments(self, parent: IRType, field: IRField) -> dict[str, Any] | None:
        merged: dict[str, Any] = {}
        for hook in self.hooks:
            values = hook.field_arguments(parent, field)
            if values:
                merged.update(values)
        return merged or None
