"""
Per-call options applied to a prepared request before it is sent.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
from requests.auth import HTTPBasicAuth

from utils.request_query import set_query

logger = logging.getLogger(__name__)

BeforeHook = Callable[[requests.PreparedRequest], None]
AfterHook = Callable[[requests.Response], None]


class CallOption:
    """Base class for options run around a single call."""

    def before(self, request: requests.PreparedRequest):
        """Adjust the request before it is sent."""

    def after(self, response: requests.Response):
        """Inspect the response once it arrives."""


class QueryOption(CallOption):
    """Add encoded query parameters to the request URL."""

    def __init__(self, query: Any):
        self.query = query

    def before(self, request: requests.PreparedRequest):
        set_query(request, self.query)


class BasicAuthOption(CallOption):
    """Send HTTP basic credentials."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def before(self, request: requests.PreparedRequest):
        if self.username or self.password:
            HTTPBasicAuth(self.username, self.password)(request)


class BearerTokenOption(CallOption):
    """Send a bearer token in the Authorization header."""

    def __init__(self, token: str):
        self.token = token

    def before(self, request: requests.PreparedRequest):
        if self.token:
            request.headers["Authorization"] = f"Bearer {self.token}"


@dataclass
class CallOptions(CallOption):
    """
    Common call options bundled together.

    The before hook runs first so that the other options can override what
    it sets. Credentials are only sent when present.
    """

    query: Any = None
    username: str = ""
    password: str = ""
    bearer_token: str = ""
    before_hook: Optional[BeforeHook] = None
    after_hook: Optional[AfterHook] = None

    def before(self, request: requests.PreparedRequest):
        if self.before_hook is not None:
            self.before_hook(request)
        set_query(request, self.query)
        BasicAuthOption(self.username, self.password).before(request)
        BearerTokenOption(self.bearer_token).before(request)

    def after(self, response: requests.Response):
        if self.after_hook is not None:
            self.after_hook(response)


def apply_before(request: requests.PreparedRequest, *options: CallOption) -> requests.PreparedRequest:
    """
    Run the before step of each option, in order.

    Returns:
        The same request, for chaining
    """
    for option in options:
        option.before(request)
    logger.debug(f"Applied {len(options)} call option(s) to {request.method} {request.url}")
    return request


def apply_after(response: requests.Response, *options: CallOption) -> requests.Response:
    """Run the after step of each option, in order."""
    for option in options:
        option.after(response)
    return response
