"""
Encoder configuration and the process-wide default used by ``encode()``.
"""
import dataclasses
import logging
from threading import Lock
from typing import Callable, Optional, Tuple

import config

logger = logging.getLogger(__name__)

ScopeJoin = Callable[[str, str], str]


def bracket_join(scope: str, name: str) -> str:
    """user + name -> user[name]"""
    return f"{scope}[{name}]"


def dot_join(scope: str, name: str) -> str:
    """user + name -> user.name"""
    return f"{scope}.{name}"


SCOPE_JOINS = {
    "brackets": bracket_join,
    "dots": dot_join,
}


@dataclasses.dataclass(frozen=True)
class EncoderOptions:
    """
    Settings for a QueryEncoder.

    Attributes:
        tag_names: Field metadata keys holding the query tag, in lookup order
        layout_tag: Field metadata key holding a strftime layout
        delimiter_tag: Field metadata key holding a custom sequence delimiter
        scope_join: Builds a nested key from the current scope and a name
        max_depth: Deepest container nesting accepted before giving up
    """

    tag_names: Tuple[str, ...] = ("query", "url")
    layout_tag: str = "layout"
    delimiter_tag: str = "del"
    scope_join: ScopeJoin = bracket_join
    max_depth: int = 32

    @classmethod
    def from_config(cls) -> "EncoderOptions":
        """Build options from the settings in config.py."""
        scope_join = SCOPE_JOINS.get(config.SCOPE_STYLE)
        if scope_join is None:
            logger.warning(
                f"Unknown scope style {config.SCOPE_STYLE!r}, using brackets"
            )
            scope_join = bracket_join
        return cls(
            tag_names=config.TAG_NAMES,
            layout_tag=config.LAYOUT_TAG,
            delimiter_tag=config.DELIMITER_TAG,
            scope_join=scope_join,
            max_depth=config.MAX_DEPTH,
        )


_default_options: Optional[EncoderOptions] = None
_default_lock = Lock()


def get_default_options() -> EncoderOptions:
    """Return the process-wide options, building them from config on first use."""
    global _default_options
    with _default_lock:
        if _default_options is None:
            _default_options = EncoderOptions.from_config()
        return _default_options


def set_default_options(options: EncoderOptions):
    """Replace the process-wide options. Meant for start-up time."""
    global _default_options
    with _default_lock:
        _default_options = options
    logger.debug(f"Default encoder options set: {options}")


def set_scope_join(scope_join: ScopeJoin):
    """Swap the scope join strategy of the process-wide options."""
    options = dataclasses.replace(get_default_options(), scope_join=scope_join)
    set_default_options(options)
