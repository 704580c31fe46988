"""
Attach encoded query values to requests objects.
"""
import logging
from typing import Any, Optional, Union
from urllib.parse import urlsplit, urlunsplit

import requests

from query.encode import QueryEncoder

logger = logging.getLogger(__name__)

Request = Union[requests.Request, requests.PreparedRequest]


def append_query(url: str, query_string: str) -> str:
    """
    Append a query string to url.

    The new parameters follow any existing ones, joined with ``&``.
    """
    if not query_string:
        return url
    scheme, netloc, path, query, fragment = urlsplit(url)
    query = f"{query}&{query_string}" if query else query_string
    return urlunsplit((scheme, netloc, path, query, fragment))


def set_query(request: Request, q: Any, encoder: Optional[QueryEncoder] = None):
    """
    Encode q and add it to the query string of request.

    Example:
        @dataclass
        class Page:
            page: int = query_field("page")
            size: int = query_field("size,omitempty")

        request = requests.Request("GET", "https://example.com/api?x=1")
        set_query(request, Page(page=2))
        # request.url == "https://example.com/api?x=1&page=2"

    Args:
        request: requests Request or PreparedRequest; its url is updated
        q: Anything QueryEncoder.encode accepts; None leaves request alone
        encoder: Encoder to use; one with default options when omitted

    Raises:
        QueryError: If q cannot be encoded
    """
    if q is None:
        return
    values = (encoder or QueryEncoder()).encode(q)
    query_string = values.encode()
    if not query_string:
        return
    request.url = append_query(request.url or "", query_string)
    logger.debug(f"Query set on {request.method} {request.url}")
