"""dataapi-client exception hierarchy.

Every failure surfaced by the library is a DataApiError subclass. Errors
raised by boto3/botocore are wrapped in TransportError and never reach
callers raw.
"""

from __future__ import annotations

from typing import Any


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)


class DataApiError(Exception):
    """Base exception for all dataapi-client errors."""


class ArgumentError(DataApiError, ValueError):
    """Raised when a call is built with malformed arguments."""


# --- Mapping ---


class MappingError(DataApiError):
    """Base for object <-> row mapping errors."""


class UnsupportedParameterTypeError(MappingError):
    """Raised when a parameter value has no wire encoding."""

    def __init__(self, value_type: type) -> None:
        self.value_type = value_type
        super().__init__(f"Unknown parameter type: {_type_name(value_type)}")


class UnsupportedResultTypeError(MappingError):
    """Raised when a result column cannot be converted to the requested type."""

    def __init__(self, target_type: Any) -> None:
        self.target_type = target_type
        super().__init__(f"Unsupported result type: {_type_name(target_type)}")


class CannotConvertError(MappingError):
    """Raised when a wire field does not carry a value the target type can parse."""

    def __init__(self, field: Any, target_type: Any) -> None:
        self.field = field
        self.target_type = target_type
        super().__init__(f"Cannot convert field {field!r} to type {_type_name(target_type)}")


class NoFieldOrSetterError(MappingError):
    """Raised when a column has no matching setter or field on the target class."""

    def __init__(self, target_class: type, field_name: str) -> None:
        self.target_class = target_class
        self.field_name = field_name
        super().__init__(
            f"Class '{_type_name(target_class)}' does not contain field "
            f"'{field_name}' or a corresponding setter"
        )


class StaticFieldError(MappingError):
    """Raised when the only field matching a column is a ClassVar."""

    def __init__(self, target_class: type, field_name: str) -> None:
        self.target_class = target_class
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' in class {_type_name(target_class)} is static")


class CannotAccessFieldError(MappingError):
    """Raised when a resolved field refuses assignment."""

    def __init__(self, target_class: type, field_name: str) -> None:
        self.target_class = target_class
        self.field_name = field_name
        super().__init__(f"Cannot access field '{field_name}' in class {_type_name(target_class)}")


class CannotSetValueError(MappingError):
    """Raised when a setter raises while being invoked."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Cannot set value '{field_name}'")


class AmbiguousSetterError(MappingError):
    """Raised when more than one setter qualifies for the same field."""

    def __init__(self, field_name: str, candidates: list[str]) -> None:
        self.field_name = field_name
        self.candidates = candidates
        super().__init__(f"Ambiguous setter for field '{field_name}': {candidates}")


class CannotCreateInstanceError(MappingError):
    """Raised when a located constructor fails. The cause is chained."""

    def __init__(self, target_class: type) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot create instance of type {_type_name(target_class)}")


class NoArgsConstructorError(MappingError):
    """Raised when neither an all-args nor a no-args constructor is usable."""

    def __init__(self, target_class: type) -> None:
        self.target_class = target_class
        super().__init__(
            f"Cannot create instance of type {_type_name(target_class)}: "
            "no args constructor not found"
        )


class VoidReturnTypeError(MappingError):
    """Raised when a getter is declared to return None."""

    def __init__(self, getter_name: str) -> None:
        self.getter_name = getter_name
        super().__init__(f"Void return type is not supported: {getter_name}()")


class FieldNotFoundError(MappingError):
    """Raised when a placeholder has no getter or field on the parameter object."""

    def __init__(self, field_name: str, obj: Any) -> None:
        self.field_name = field_name
        super().__init__(
            f"Cannot find field or getter corresponding to placeholder "
            f"'{field_name}' in object '{obj!r}'"
        )


class EmptyResultSetError(MappingError):
    """Raised when map_to_single is called on a result with no rows."""

    def __init__(self) -> None:
        super().__init__("Result set is empty")


# --- Execution ---


class ExecutionError(DataApiError):
    """Base for statement execution errors."""


class NoResultError(ExecutionError):
    """Raised when single_value finds no row or no column to read."""

    def __init__(self, detail: str = "Result set is empty") -> None:
        super().__init__(detail)


class TransportError(ExecutionError):
    """Raised when the remote Data API call fails."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {detail}")


# --- Transaction ---


class TransactionError(DataApiError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")
