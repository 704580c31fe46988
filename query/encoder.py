"""
Hook for values that encode themselves into query parameters.
"""
import dataclasses
import functools
import types
import typing
from typing import Any, Dict, Optional, Protocol, runtime_checkable

if typing.TYPE_CHECKING:
    from query.values import QueryValues

_UNION_TYPES = tuple(
    t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None
)


@runtime_checkable
class Encodable(Protocol):
    """
    Implemented by any type that encodes itself in a non-standard way.

    ``encode_values`` receives the key computed for the field and the values
    being built. Whatever it raises aborts the whole encode unchanged.
    """

    def encode_values(self, key: str, values: "QueryValues") -> None:
        ...


def is_encodable(value: Any) -> bool:
    return not isinstance(value, type) and isinstance(value, Encodable)


def _unwrap_optional(annotation: Any) -> Any:
    """Return X for Optional[X] / X | None, the annotation otherwise."""
    if typing.get_origin(annotation) in _UNION_TYPES:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


@functools.lru_cache(maxsize=None)
def _field_types(cls: type) -> Dict[str, Any]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to the raw annotations
        hints = {f.name: f.type for f in dataclasses.fields(cls)}
    return {name: _unwrap_optional(hint) for name, hint in hints.items()}


def zero_encoder_for(cls: type, field_name: str) -> Optional[Encodable]:
    """
    Build a zero instance of a field's declared type if that type encodes itself.

    Used when the field holds None so the custom encoder still gets to
    decide what an absent value looks like.

    Args:
        cls: Dataclass owning the field
        field_name: Name of the field

    Returns:
        Instance created with no arguments, or None when the declared type
        is not a class providing ``encode_values``
    """
    declared = _field_types(cls).get(field_name)
    if not isinstance(declared, type):
        return None
    if not callable(getattr(declared, "encode_values", None)):
        return None
    return declared()
