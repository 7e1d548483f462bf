"""Scalar type conversion between Python values and wire fields.

to_wire() picks the wire variant (and type hint) for a parameter value.
from_wire() reads a result field back as the declared type of the attribute
or constructor argument it is destined for.

Temporal text formats:
    timestamp  YYYY-MM-DD HH:MM:SS[.fff]
    date       YYYY-MM-DD
    time       HH:MM:SS[.fff]

Fractional seconds are written as milliseconds, and only when non-zero.
"""

from __future__ import annotations

import ctypes
import enum
import types
import uuid
from collections.abc import Callable
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Union, get_args, get_origin

from dataapi_client.core.enums import TypeHint
from dataapi_client.core.exceptions import (
    CannotConvertError,
    UnsupportedParameterTypeError,
    UnsupportedResultTypeError,
)
from dataapi_client.core.wire import SqlParameter, WireField

TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S.%f", "%Y-%m-%d %H:%M:%S")
DATE_FORMATS = ("%Y-%m-%d",)
TIME_FORMATS = ("%H:%M:%S.%f", "%H:%M:%S")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# c_int8/c_int16/c_int32/c_int64 are aliases of these
_CTYPES_INTEGERS: tuple[type, ...] = (
    ctypes.c_byte,
    ctypes.c_short,
    ctypes.c_int,
    ctypes.c_long,
    ctypes.c_longlong,
)
_CTYPES_FLOATS: tuple[type, ...] = (ctypes.c_float, ctypes.c_double)


# ---------------------------------------------------------------------------
# Python -> wire
# ---------------------------------------------------------------------------


def _format_clock(value: datetime | time) -> str:
    text = f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    millis = value.microsecond // 1000
    if millis:
        text += f".{millis:03d}"
    return text


def format_timestamp(value: datetime) -> str:
    """Format a datetime; aware values are shifted to UTC first."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return f"{value.date().isoformat()} {_format_clock(value)}"


def format_date(value: date) -> str:
    return value.isoformat()


def format_time(value: time) -> str:
    return _format_clock(value)


def to_wire(value: Any) -> tuple[WireField, TypeHint | None]:
    """Convert a Python value to a wire field and optional type hint.

    Raises:
        UnsupportedParameterTypeError: If the value's type has no encoding.
    """
    if value is None:
        return WireField.null(), None
    # bool and Enum before int/str: bool is an int, IntEnum/StrEnum are both
    if isinstance(value, bool):
        return WireField(boolean_value=value), None
    if isinstance(value, enum.Enum):
        return WireField(string_value=value.name), None
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return WireField(long_value=value), None
        return WireField(string_value=str(value)), TypeHint.DECIMAL
    if isinstance(value, ctypes.c_wchar):
        return WireField(long_value=ord(value.value)), None
    if isinstance(value, _CTYPES_INTEGERS):
        return WireField(long_value=value.value), None
    if isinstance(value, float):
        return WireField(double_value=value), None
    if isinstance(value, _CTYPES_FLOATS):
        return WireField(double_value=value.value), None
    if isinstance(value, str):
        return WireField(string_value=value), None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return WireField(blob_value=bytes(value)), None
    if isinstance(value, Decimal):
        return WireField(string_value=str(value)), TypeHint.DECIMAL
    # datetime before date: datetime is a date
    if isinstance(value, datetime):
        return WireField(string_value=format_timestamp(value)), TypeHint.TIMESTAMP
    if isinstance(value, date):
        return WireField(string_value=format_date(value)), TypeHint.DATE
    if isinstance(value, time):
        return WireField(string_value=format_time(value)), TypeHint.TIME
    if isinstance(value, uuid.UUID):
        return WireField(string_value=str(value)), TypeHint.UUID

    raise UnsupportedParameterTypeError(type(value))


def to_parameter(name: str, value: Any) -> SqlParameter:
    """Build a named SqlParameter from a Python value."""
    field, hint = to_wire(value)
    return SqlParameter(name=name, value=field, type_hint=hint)


# ---------------------------------------------------------------------------
# wire -> Python
# ---------------------------------------------------------------------------


def _variant(field: WireField, name: str, target: Any) -> Any:
    value = getattr(field, name)
    if value is None:
        raise CannotConvertError(field, target)
    return value


def _parse_temporal(text: str, formats: tuple[str, ...]) -> datetime | None:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _to_str(field: WireField, target: Any) -> str:
    return _variant(field, "string_value", target)


def _to_bool(field: WireField, target: Any) -> bool:
    return _variant(field, "boolean_value", target)


def _to_bytes(field: WireField, target: Any) -> bytes:
    return _variant(field, "blob_value", target)


def _to_bytearray(field: WireField, target: Any) -> bytearray:
    return bytearray(_variant(field, "blob_value", target))


def _to_int(field: WireField, target: Any) -> int:
    if field.long_value is not None:
        return field.long_value
    if field.string_value is not None:
        try:
            return int(field.string_value, 10)
        except ValueError as e:
            raise CannotConvertError(field, target) from e
    raise CannotConvertError(field, target)


def _to_float(field: WireField, target: Any) -> float:
    if field.double_value is not None:
        return field.double_value
    if field.long_value is not None:
        return float(field.long_value)
    raise CannotConvertError(field, target)


def _to_decimal(field: WireField, target: Any) -> Decimal:
    if field.string_value is not None:
        try:
            return Decimal(field.string_value)
        except InvalidOperation as e:
            raise CannotConvertError(field, target) from e
    if field.long_value is not None:
        return Decimal(field.long_value)
    if field.double_value is not None:
        return Decimal(repr(field.double_value))
    raise CannotConvertError(field, target)


def _to_uuid(field: WireField, target: Any) -> uuid.UUID:
    try:
        return uuid.UUID(_variant(field, "string_value", target))
    except ValueError as e:
        raise CannotConvertError(field, target) from e


def _to_datetime(field: WireField, target: Any) -> datetime:
    parsed = _parse_temporal(_variant(field, "string_value", target), TIMESTAMP_FORMATS)
    if parsed is None:
        raise CannotConvertError(field, target)
    return parsed


def _to_date(field: WireField, target: Any) -> date:
    text = _variant(field, "string_value", target)
    parsed = _parse_temporal(text, TIMESTAMP_FORMATS)
    if parsed is None:
        parsed = _parse_temporal(text, DATE_FORMATS)
    if parsed is None:
        raise CannotConvertError(field, target)
    return parsed.date()


def _to_time(field: WireField, target: Any) -> time:
    text = _variant(field, "string_value", target)
    parsed = _parse_temporal(text, TIMESTAMP_FORMATS)
    if parsed is None:
        parsed = _parse_temporal(text, TIME_FORMATS)
    if parsed is None:
        raise CannotConvertError(field, target)
    return parsed.time()


def _to_enum(field: WireField, target: type[enum.Enum]) -> enum.Enum:
    name = _variant(field, "string_value", target)
    try:
        return target[name]
    except KeyError as e:
        raise CannotConvertError(field, target) from e


def _to_char(field: WireField, target: Any) -> str:
    try:
        return chr(_variant(field, "long_value", target))
    except (ValueError, OverflowError) as e:
        raise CannotConvertError(field, target) from e


_FROM_WIRE: dict[Any, Callable[[WireField, Any], Any]] = {
    str: _to_str,
    bool: _to_bool,
    bytes: _to_bytes,
    bytearray: _to_bytearray,
    int: _to_int,
    float: _to_float,
    Decimal: _to_decimal,
    uuid.UUID: _to_uuid,
    datetime: _to_datetime,
    date: _to_date,
    time: _to_time,
    ctypes.c_wchar: _to_char,
}


def unwrap_type(target: Any) -> Any:
    """Strip Optional/NewType wrappers; multi-member unions become Any."""
    while True:
        supertype = getattr(target, "__supertype__", None)
        if supertype is not None:
            target = supertype
            continue
        if get_origin(target) in (Union, types.UnionType):
            members = [arg for arg in get_args(target) if arg is not type(None)]
            if len(members) != 1:
                return Any
            target = members[0]
            continue
        return target


def from_wire(field: WireField, target_type: Any = Any) -> Any:
    """Convert a wire field to ``target_type``.

    A null-marked field yields None for every target. ``Any`` (or a missing
    annotation) yields the populated variant unchanged.

    Raises:
        CannotConvertError: If the field holds no value the target can read.
        UnsupportedResultTypeError: If the target type is not supported.
    """
    if field.null_marked:
        return None

    target = unwrap_type(target_type)
    if target is Any or target is object:
        return field.natural_value()

    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _to_enum(field, target)

    converter = _FROM_WIRE.get(target)
    if converter is not None:
        return converter(field, target)

    if target in _CTYPES_INTEGERS:
        # ctypes wraps silently, giving the truncating narrowing we want
        return target(_variant(field, "long_value", target)).value
    if target in _CTYPES_FLOATS:
        return target(_to_float(field, target)).value

    raise UnsupportedResultTypeError(target_type)
