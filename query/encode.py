"""
Encoding of dataclasses, mappings and sequences into query values.

Values are walked recursively. Nested containers produce scoped keys such as
``user[addr][city]=SFO``; a field tagged ``,inline`` merges its keys into the
enclosing scope instead, e.g. ``addr[city]=SFO``.

Field tags (metadata key ``query``, falling back to ``url``):

    -                 field is skipped
    -,                field is named "-"
    name              parameter name, defaults to the field name
    omitempty         skip the field when its value is empty
    inline            merge a nested mapping/dataclass into the current scope
    comma|space|semicolon
                      join sequence elements into one value
    brackets          repeat the key as ``name[]`` for each element
    numbered          repeat the key as ``name0``, ``name1``...
    idx               repeat the key as ``name[0]``, ``name[1]``...
    int               render booleans as 1/0
    unix|unixmilli|unixnano
                      render datetimes as Unix epoch numbers

Sibling metadata keys ``layout`` (strftime pattern for datetimes) and ``del``
(custom sequence delimiter) are read next to the tag.
"""
import dataclasses
import logging
from typing import Any, Mapping, Optional, Sequence

from query.encoder import zero_encoder_for
from query.errors import MaxDepthExceededError, UnsupportedKindError
from query.options import EncoderOptions, get_default_options
from query.render import (
    BYTES_TYPES,
    SEQUENCE_TYPES,
    SET_TYPES,
    Kind,
    as_sequence,
    is_empty,
    is_struct,
    kind_of,
    render,
)
from query.tags import (
    EMPTY_SPEC,
    INDEXED,
    INLINE,
    NUMBERED,
    OMITEMPTY,
    FieldSpec,
    field_spec,
)
from query.values import QueryValues

logger = logging.getLogger(__name__)


class QueryEncoder:
    """Turns nested values into query values using injected options."""

    def __init__(self, options: Optional[EncoderOptions] = None):
        """
        Initialize the encoder.

        Args:
            options: Encoder settings; the process-wide default when omitted
        """
        self.options = options or get_default_options()

    def encode(self, value: Any) -> QueryValues:
        """
        Encode value into query values.

        Strings and bytes are parsed as ready-made query strings. Mappings
        contribute one key per entry, lists, tuples and sets are read as
        alternating key/value pairs, and dataclasses are encoded field by
        field according to their tags.

        Args:
            value: Dataclass instance, mapping, list, tuple, str or bytes

        Returns:
            Freshly built query values

        Raises:
            UnsupportedKindError: If value is of any other kind
            MaxDepthExceededError: If nesting exceeds ``max_depth``
        """
        values = QueryValues()
        logger.debug(f"Encoding {type(value).__name__} value")

        # encode_values is only consulted for fields, never for the root
        if value is None:
            return values
        if isinstance(value, str):
            return QueryValues.parse(value)
        if isinstance(value, BYTES_TYPES):
            return QueryValues.parse(bytes(value).decode("utf-8", errors="replace"))
        if isinstance(value, Mapping):
            self._visit_mapping(values, value, "", 0, EMPTY_SPEC)
        elif isinstance(value, SEQUENCE_TYPES + SET_TYPES):
            self._add_pairs(values, as_sequence(value))
        elif is_struct(value):
            self._visit_struct(values, value, "", 0)
        else:
            raise UnsupportedKindError(value)
        return values

    def _add_pairs(self, values: QueryValues, seq: Sequence):
        """Read a root sequence as alternating keys and values; a trailing key is dropped."""
        for i in range(0, len(seq) - 1, 2):
            values.add(render(seq[i]), render(seq[i + 1]))

    def _scoped(self, scope: str, name: str) -> str:
        if scope:
            return self.options.scope_join(scope, name)
        return name

    def _check_depth(self, key: str, depth: int):
        if depth > self.options.max_depth:
            logger.warning(
                f"Nesting too deep at {key!r} (depth {depth}, limit {self.options.max_depth})"
            )
            raise MaxDepthExceededError(key, depth, self.options.max_depth)

    def _visit_struct(self, values: QueryValues, obj: Any, scope: str, depth: int):
        """
        Encode the fields of a dataclass instance in declaration order.

        Embedded dataclass fields are promoted: their fields are encoded
        after the direct fields, in the same scope. Each promotion still
        counts one level towards the depth limit.
        """
        self._check_depth(scope, depth)
        embedded = []

        for field in dataclasses.fields(obj):
            spec = field_spec(
                field,
                self.options.tag_names,
                self.options.layout_tag,
                self.options.delimiter_tag,
            )
            if field.name.startswith("_") and not (spec and spec.embedded):
                continue
            if spec is None:
                continue

            value = getattr(obj, field.name)

            if spec.embedded and not spec.explicit_name and kind_of(value) is Kind.STRUCT:
                embedded.append(value)
                continue

            key = self._scoped(scope, spec.name)

            if spec.has(OMITEMPTY) and is_empty(value):
                continue

            if value is None:
                value = zero_encoder_for(type(obj), field.name)

            if kind_of(value) is Kind.CUSTOM:
                try:
                    value.encode_values(key, values)
                except Exception as e:
                    logger.error(f"Custom encoder failed for {key!r}: {e}")
                    raise
                continue

            inline = spec.has(INLINE) and not spec.explicit_name
            self._encode_value(values, value, key, scope, depth, spec, inline)

        for value in embedded:
            self._visit_struct(values, value, scope, depth + 1)

    def _visit_mapping(
        self,
        values: QueryValues,
        mapping: Mapping,
        scope: str,
        depth: int,
        spec: FieldSpec,
    ):
        """Encode mapping entries, skipping empty ones."""
        self._check_depth(scope, depth)
        for entry_key, value in mapping.items():
            if is_empty(value):
                continue
            key = self._scoped(scope, render(entry_key))
            self._encode_value(values, value, key, scope, depth, spec, False)

    def _visit_sequence(self, values: QueryValues, seq: Sequence, scope: str, depth: int):
        """
        Encode a list or tuple nested directly inside a sequence field.

        Mapping and dataclass elements are encoded in the current scope.
        Anything else is read as a key followed by its value, ignoring the
        scope, and a trailing key without value is dropped.
        """
        self._check_depth(scope, depth)
        i = 0
        while i < len(seq):
            element = seq[i]
            kind = kind_of(element)
            if kind is Kind.MAPPING:
                self._visit_mapping(values, element, scope, depth + 1, EMPTY_SPEC)
                i += 1
            elif kind is Kind.STRUCT:
                self._visit_struct(values, element, scope, depth + 1)
                i += 1
            else:
                if i + 1 < len(seq):
                    values.add(render(element), render(seq[i + 1]))
                i += 2

    def _encode_value(
        self,
        values: QueryValues,
        value: Any,
        key: str,
        scope: str,
        depth: int,
        spec: FieldSpec,
        inline: bool,
    ):
        """Encode one field or mapping entry value under key."""
        kind = kind_of(value)

        if kind is Kind.SEQUENCE:
            self._encode_sequence(values, as_sequence(value), key, depth, spec)
        elif kind is Kind.MAPPING or kind is Kind.STRUCT:
            next_scope = scope if inline else key
            if kind is Kind.MAPPING:
                self._visit_mapping(values, value, next_scope, depth + 1, spec)
            else:
                self._visit_struct(values, value, next_scope, depth + 1)
        else:
            values.add(key, render(value, spec))

    def _encode_sequence(
        self,
        values: QueryValues,
        seq: Sequence,
        key: str,
        depth: int,
        spec: FieldSpec,
    ):
        """
        Encode a list or tuple held by a field or mapping entry.

        A custom delimiter or the comma/space/semicolon options join the
        elements into one value. Otherwise each element gets its own value,
        under ``key[]`` with brackets, ``key0`` when numbered, ``key[0]``
        with idx, or key itself.
        """
        if not seq:
            return

        delimiter = spec.join_delimiter()
        if delimiter is not None:
            values.add(key, delimiter.join(render(element, spec) for element in seq))
            return

        if spec.uses_brackets():
            key = key + "[]"

        for i, element in enumerate(seq):
            element_key = key
            if spec.has(NUMBERED):
                element_key = f"{key}{i}"
            elif spec.has(INDEXED):
                element_key = self.options.scope_join(key, str(i))

            kind = kind_of(element)
            if kind is Kind.MAPPING:
                self._visit_mapping(values, element, element_key, depth + 1, spec)
            elif kind is Kind.STRUCT:
                self._visit_struct(values, element, element_key, depth + 1)
            elif kind is Kind.SEQUENCE:
                self._visit_sequence(values, as_sequence(element), element_key, depth + 1)
            else:
                values.add(element_key, render(element, spec))


def encode(value: Any) -> QueryValues:
    """
    Encode value with the process-wide default options.

    See QueryEncoder.encode.
    """
    return QueryEncoder().encode(value)
