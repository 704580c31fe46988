"""
Value classification and string rendering for query parameters.
"""
import dataclasses
import enum
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from numbers import Number
from typing import Any, Optional

from query.encoder import is_encodable
from query.tags import EMPTY_SPEC, INT, UNIX, UNIX_MILLI, UNIX_NANO, FieldSpec

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MICROSECOND = timedelta(microseconds=1)

BYTES_TYPES = (bytes, bytearray, memoryview)
SEQUENCE_TYPES = (list, tuple)
SET_TYPES = (set, frozenset)


class Kind(enum.Enum):
    """How the encoder treats a value."""

    NONE = "none"
    SCALAR = "scalar"
    TIME = "time"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCT = "struct"
    CUSTOM = "custom"


def is_struct(value: Any) -> bool:
    """Check if value is a dataclass instance (not the class itself)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def kind_of(value: Any) -> Kind:
    """Classify a value for dispatch."""
    if value is None:
        return Kind.NONE
    if is_encodable(value):
        return Kind.CUSTOM
    if isinstance(value, datetime):
        return Kind.TIME
    if isinstance(value, BYTES_TYPES):
        return Kind.BYTES
    if isinstance(value, str):
        return Kind.SCALAR
    if isinstance(value, SEQUENCE_TYPES + SET_TYPES):
        return Kind.SEQUENCE
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if is_struct(value):
        return Kind.STRUCT
    return Kind.SCALAR


def as_sequence(value: Any) -> Any:
    """Return value ready for indexing; sets are ordered by their rendered elements."""
    if isinstance(value, SET_TYPES):
        return sorted(value, key=render)
    return value


def is_zero_time(value: datetime) -> bool:
    return value.replace(tzinfo=None) == datetime.min


def is_empty(value: Any) -> bool:
    """
    Check if a value counts as empty for the ``omitempty`` option.

    Empty values are None, False, numeric zero, zero-length strings, bytes
    and containers, the zero datetime, and anything whose ``is_zero()``
    returns true. Dataclass instances are only empty through ``is_zero()``.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, datetime):
        return is_zero_time(value)
    if isinstance(value, (str,) + BYTES_TYPES + SEQUENCE_TYPES + SET_TYPES):
        return len(value) == 0
    if isinstance(value, Mapping):
        return len(value) == 0
    if isinstance(value, Number):
        return value == 0
    is_zero = getattr(value, "is_zero", None)
    if callable(is_zero):
        return bool(is_zero())
    return False


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def epoch_micros(value: datetime) -> int:
    """Whole microseconds between the Unix epoch and value."""
    return (_as_utc(value) - EPOCH) // MICROSECOND


def _truncate_div(a: int, b: int) -> int:
    # Integer division rounding toward zero
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def format_rfc3339(value: datetime) -> str:
    """Format value as an RFC 3339 timestamp with second precision."""
    value = _as_utc(value)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = offset // timedelta(minutes=1)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def render_time(value: datetime, spec: FieldSpec = EMPTY_SPEC) -> str:
    """
    Render a datetime.

    The first matching rule wins: ``unix`` seconds, ``unixmilli``,
    ``unixnano``, the field layout (a strftime pattern), RFC 3339.
    """
    if is_zero_time(value):
        return ""
    if spec.has(UNIX):
        return str(epoch_micros(value) // 1_000_000)
    if spec.has(UNIX_MILLI):
        return str(_truncate_div(epoch_micros(value), 1_000))
    if spec.has(UNIX_NANO):
        return str(epoch_micros(value) * 1_000)
    if spec.layout:
        return value.strftime(spec.layout)
    return format_rfc3339(value)


def render_float(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def render(value: Any, spec: Optional[FieldSpec] = None) -> str:
    """
    Render a single value as a query parameter string.

    Args:
        value: Value to render; None renders as an empty string
        spec: Field spec whose options steer bool and time rendering

    Returns:
        String form of value
    """
    if spec is None:
        spec = EMPTY_SPEC
    if value is None:
        return ""
    if isinstance(value, bool):
        if spec.has(INT):
            return "1" if value else "0"
        return "true" if value else "false"
    if isinstance(value, datetime):
        return render_time(value, spec)
    if isinstance(value, BYTES_TYPES):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, enum.Enum):
        return render(value.value, spec)
    if isinstance(value, float):
        return render_float(value)
    return str(value)
