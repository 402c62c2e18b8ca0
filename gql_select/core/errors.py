"""Exceptions raised by gql-select.

Every error derives from SelectionError so callers can catch the whole
family at once. Traversal-time anomalies (unknown selection keys, fields
whose type cannot be classified) are never raised; they are skipped.
"""


class SelectionError(Exception):
    """Base exception for all gql-select errors."""
    pass


class SchemaError(SelectionError):
    """Raised when the SDL cannot be turned into a usable type graph.

    Covers syntax errors, dangling type references and a missing or
    non-object root type.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class ValidationError(SelectionError):
    """Raised when the input handed to the serializer is unusable."""
    pass


class InputTypeError(ValidationError, TypeError):
    """Raised when an argument has the wrong Python type.

    Non-string schema, non-mapping selection tree, non-callable modifier.
    """
    pass


class OperationError(ValidationError):
    """Raised for an unsupported operation type or an absent root type."""

    def __init__(self, message: str, operation_type: str | None = None):
        self.operation_type = operation_type
        super().__init__(message)
