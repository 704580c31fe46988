"""Tests for per-call request options."""
import requests

from utils.call_options import (
    BasicAuthOption,
    BearerTokenOption,
    CallOptions,
    QueryOption,
    apply_after,
    apply_before,
)


def _request(url="https://example.com/api"):
    return requests.Request("GET", url).prepare()


class TestBasicAuth:
    def test_sets_header(self):
        request = _request()
        BasicAuthOption("user", "pass").before(request)
        assert request.headers["Authorization"] == "Basic dXNlcjpwYXNz"

    def test_no_credentials(self):
        request = _request()
        BasicAuthOption("", "").before(request)
        assert "Authorization" not in request.headers


class TestBearerToken:
    def test_sets_header(self):
        request = _request()
        BearerTokenOption("abc123").before(request)
        assert request.headers["Authorization"] == "Bearer abc123"

    def test_no_token(self):
        request = _request()
        BearerTokenOption("").before(request)
        assert "Authorization" not in request.headers


class TestCallOptions:
    def test_query(self, restore_default_options):
        request = _request()
        CallOptions(query={"page": 2}).before(request)
        assert request.url == "https://example.com/api?page=2"

    def test_empty_options_change_nothing(self):
        request = _request()
        CallOptions().before(request)
        assert request.url == "https://example.com/api"
        assert "Authorization" not in request.headers

    def test_before_hook_runs_first(self):
        seen = []

        def hook(request):
            seen.append(request.url)
            request.headers["Authorization"] = "from hook"

        request = _request()
        CallOptions(query=["a", "1"], bearer_token="tok", before_hook=hook).before(request)
        assert seen == ["https://example.com/api"]
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.url == "https://example.com/api?a=1"

    def test_hook_kept_without_credentials(self):
        def hook(request):
            request.headers["Authorization"] = "from hook"

        request = _request()
        CallOptions(before_hook=hook).before(request)
        assert request.headers["Authorization"] == "from hook"

    def test_after_hook(self):
        seen = []
        response = requests.Response()
        CallOptions(after_hook=seen.append).after(response)
        assert seen == [response]


def test_apply_before_in_order():
    request = apply_before(_request(), QueryOption(["a", "1"]), QueryOption(["b", "2"]))
    assert request.url == "https://example.com/api?a=1&b=2"


def test_apply_after_returns_response():
    seen = []
    response = requests.Response()
    assert apply_after(response, CallOptions(after_hook=seen.append), QueryOption(None)) is response
    assert seen == [response]
