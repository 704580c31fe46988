"""
Parsing of the query tags attached to dataclass fields.

A tag is a comma separated string stored in the field metadata, for example
``field(metadata={"query": "created,omitempty,unix"})``. The first token is
the parameter name, the following ones are options.
"""
import dataclasses
from typing import Any, Dict, Optional, Tuple

import config

OMIT_TAG = "-"

OMITEMPTY = "omitempty"
INLINE = "inline"
INT = "int"
NUMBERED = "numbered"
INDEXED = "idx"
BRACKETS = "brackets"
UNIX = "unix"
UNIX_MILLI = "unixmilli"
UNIX_NANO = "unixnano"

# Join styles for sequences rendered as one value
JOIN_DELIMITERS = {
    "comma": ",",
    "space": " ",
    "semicolon": ";",
}

EMBEDDED_KEY = "embedded"


class TagOptions(Dict[str, str]):
    """Options following the name in a query tag, in declaration order."""

    def first_of(self, *names: str) -> Optional[str]:
        """Return whichever of names was declared first, or None."""
        for option in self:
            if option in names:
                return option
        return None


def parse_tag(tag: str) -> Tuple[str, TagOptions]:
    """
    Split a query tag into its name and options.

    Options may carry a value after a colon. Only the first colon separates
    the option from its value, so ``layout:15:04`` keeps ``15:04`` intact.

    Args:
        tag: Raw tag string

    Returns:
        Tuple of (name, options)
    """
    name, _, rest = tag.partition(",")
    options = TagOptions()
    for token in rest.split(","):
        if not token:
            continue
        key, _, value = token.partition(":")
        options[key] = value
    return name, options


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """Everything the encoder needs to know about one dataclass field."""

    name: str
    field_name: str
    options: TagOptions = dataclasses.field(default_factory=TagOptions)
    explicit_name: bool = False
    layout: str = ""
    delimiter: str = ""
    embedded: bool = False

    def has(self, option: str) -> bool:
        return option in self.options

    def join_delimiter(self) -> Optional[str]:
        """
        Delimiter used to join sequence elements into one value.

        A custom delimiter beats the comma/space/semicolon flags; among the
        flags (and ``brackets``, which never joins) the first declared wins.
        """
        if self.delimiter:
            return self.delimiter
        style = self.options.first_of(BRACKETS, *JOIN_DELIMITERS)
        if style is None or style == BRACKETS:
            return None
        return JOIN_DELIMITERS[style]

    def uses_brackets(self) -> bool:
        if self.delimiter:
            return False
        return self.options.first_of(BRACKETS, *JOIN_DELIMITERS) == BRACKETS


# Used for values that carry no field of their own (map entries, roots)
EMPTY_SPEC = FieldSpec(name="", field_name="")


def field_tag(metadata: Any, tag_names: Tuple[str, ...]) -> str:
    """Return the first non-empty tag found under tag_names."""
    for tag_name in tag_names:
        tag = metadata.get(tag_name, "")
        if tag:
            return tag
    return ""


def field_spec(
    field: dataclasses.Field,
    tag_names: Tuple[str, ...] = config.TAG_NAMES,
    layout_tag: str = config.LAYOUT_TAG,
    delimiter_tag: str = config.DELIMITER_TAG,
) -> Optional[FieldSpec]:
    """
    Build the FieldSpec of a dataclass field from its metadata.

    Args:
        field: Dataclass field
        tag_names: Metadata keys holding the query tag, in lookup order
        layout_tag: Metadata key of the time layout
        delimiter_tag: Metadata key of the custom sequence delimiter

    Returns:
        Field spec, or None when the tag omits the field
    """
    metadata = field.metadata
    tag = field_tag(metadata, tag_names)
    if tag == OMIT_TAG:
        return None

    name, options = parse_tag(tag)
    return FieldSpec(
        name=name or field.name,
        field_name=field.name,
        options=options,
        explicit_name=bool(name),
        layout=metadata.get(layout_tag) or options.get("layout", ""),
        delimiter=metadata.get(delimiter_tag) or options.get("del", ""),
        embedded=bool(metadata.get(EMBEDDED_KEY, False)),
    )


def query_field(
    tag: str = "",
    *,
    layout: Optional[str] = None,
    delimiter: Optional[str] = None,
    embedded: bool = False,
    **kwargs: Any,
) -> Any:
    """
    Declare a dataclass field together with its query tag.

    Example:
        @dataclass
        class Search:
            created: datetime = query_field("created,omitempty", layout="%Y-%m-%d")
            labels: List[str] = query_field(",comma", default_factory=list)

    Args:
        tag: Query tag, ``name,option,...``
        layout: strftime pattern for datetime values
        delimiter: Custom delimiter joining sequence elements
        embedded: Promote the fields of a nested dataclass into the parent
        **kwargs: Passed through to ``dataclasses.field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if tag:
        metadata[config.TAG_NAMES[0]] = tag
    if layout:
        metadata[config.LAYOUT_TAG] = layout
    if delimiter:
        metadata[config.DELIMITER_TAG] = delimiter
    if embedded:
        metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)
