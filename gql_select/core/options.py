"""Options shared by selection generation and query serialization."""

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from .errors import InputTypeError, OperationError, ValidationError

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class Options(BaseModel):
    """Immutable configuration record.

    Attributes:
        include_typename: Generator adds a `__typename` leaf under every
            interface/union branch
        operation_type: 'query', 'mutation' or 'subscription'; checked when
            serializing so an unknown value raises OperationError
        operation_name: Optional name emitted after the operation keyword
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    include_typename: bool = Field(default=False, alias="includeTypename")
    operation_type: str = Field(default="query", alias="operationType")
    operation_name: str | None = Field(default=None, alias="operationName")

    @classmethod
    def coerce(cls, value: "Options | Mapping[str, Any] | None") -> "Options":
        """Accept an Options instance, a plain mapping or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                return cls.model_validate(dict(value))
            except PydanticValidationError as e:
                for error in e.errors():
                    if error["loc"] and error["loc"][0] in ("operationType", "operation_type"):
                        operation_type = value.get("operationType", value.get("operation_type"))
                        raise OperationError(
                            f"Unsupported operation type: {operation_type}",
                            operation_type=operation_type,
                        ) from e
                raise ValidationError(f"Invalid options: {e}") from e
        raise InputTypeError(
            f"Options must be an Options instance or a mapping, got {type(value).__name__}"
        )

    def validated_operation_name(self) -> str | None:
        """Return operation_name after checking it is a GraphQL name."""
        if self.operation_name is None or self.operation_name == "":
            return None
        if not _NAME_RE.match(self.operation_name):
            raise ValidationError(f"Invalid operation name: {self.operation_name!r}")
        return self.operation_name
