"""
Content type to codec name registry.
"""
import logging
from threading import Lock
from typing import Dict, Optional, Tuple, Union

import requests

import config

logger = logging.getLogger(__name__)

JSON = "json"
XML = "xml"
YAML = "yaml"
PROTO = "proto"
PLAIN = "plain"

DEFAULT_SUB_TYPES = {
    # anything else falls back to json
    "*": JSON,
    "json": JSON,
    "x-protobuf": PROTO,
    "xml": XML,
    "x-yaml": YAML,
    "yaml": YAML,
    "plain": PLAIN,
}

HttpMessage = Union[requests.Request, requests.PreparedRequest, requests.Response]


def sub_content_type(content_type: str) -> str:
    """
    Extract the subtype of a MIME type.

    The subtype is the text between ``/`` and the first ``;``; a vendor
    prefix ending in ``+`` is dropped.

    Examples:
        application/json; charset=utf-8 -> json
        application/vnd.api+json -> json
        multipart/form-data -> form-data

    Args:
        content_type: MIME type, possibly with parameters

    Returns:
        Subtype, or an empty string when content_type has no ``/``
    """
    if not content_type:
        return ""
    left = content_type.find("/")
    if left == -1:
        return ""
    right = content_type.find(";")
    if right == -1:
        right = len(content_type)
    if right < left:
        return ""
    sub_type = content_type[left + 1:right].strip()
    plus = sub_type.find("+")
    if plus >= 0:
        return sub_type[plus + 1:]
    return sub_type


class ContentTypeRegistry:
    """Thread-safe mapping of content subtypes to codec names."""

    def __init__(self, sub_types: Optional[Dict[str, str]] = None):
        """
        Initialize registry.

        Args:
            sub_types: Subtype to codec name bindings; the defaults when omitted
        """
        self._sub_types = dict(DEFAULT_SUB_TYPES if sub_types is None else sub_types)
        self._lock = Lock()

    def register(self, content_type: str, name: str):
        """
        Bind the subtype of content_type to a codec name.

        Empty names are ignored.
        """
        if not name:
            return
        sub_type = sub_content_type(content_type)
        with self._lock:
            self._sub_types[sub_type] = name
        logger.info(f"Registered codec {name!r} for content subtype {sub_type!r}")

    def codec_name(self, content_type: str) -> Optional[str]:
        """Return the codec name bound to the subtype of content_type, if any."""
        sub_type = sub_content_type(content_type)
        with self._lock:
            return self._sub_types.get(sub_type)

    def codec_name_for_message(
        self,
        message: HttpMessage,
        header: str = "Content-Type",
    ) -> Tuple[str, bool]:
        """
        Pick the codec for a requests request or response from one of its headers.

        Args:
            message: requests Request, PreparedRequest or Response
            header: Header carrying the content type

        Returns:
            Tuple of (codec name, whether it came from the header). Falls
            back to the codec of the default content type when the header
            is missing or unknown.
        """
        content_type = (message.headers or {}).get(header or "Content-Type")
        if content_type:
            name = self.codec_name(content_type)
            if name:
                return name, True
            logger.debug(f"No codec registered for content type {content_type!r}")
        return self.codec_name(config.DEFAULT_CONTENT_TYPE) or JSON, False


default_registry = ContentTypeRegistry()


def register_codec_name(content_type: str, name: str):
    """Bind a content type to a codec name in the process-wide registry."""
    default_registry.register(content_type, name)


def codec_name_for_string(content_type: str) -> Optional[str]:
    """Look up a content type in the process-wide registry."""
    return default_registry.codec_name(content_type)


def codec_name_for_message(message: HttpMessage, header: str = "Content-Type") -> Tuple[str, bool]:
    """Look up the codec of a request or response in the process-wide registry."""
    return default_registry.codec_name_for_message(message, header)
