"""Tests for QueryValues."""
import pytest

from query.values import QueryValues


class TestMutation:
    def test_add_appends(self):
        values = QueryValues()
        values.add("a", "1")
        values.add("a", "2")
        assert values == {"a": ["1", "2"]}

    def test_set_replaces(self):
        values = QueryValues({"a": ["1", "2"]})
        values.set("a", "3")
        assert values == {"a": ["3"]}

    def test_get_first(self):
        values = QueryValues({"a": ["1", "2"], "b": []})
        assert values.get_first("a") == "1"
        assert values.get_first("b") == ""
        assert values.get_first("missing") == ""
        assert values.get_first("missing", "x") == "x"

    def test_delete(self):
        values = QueryValues({"a": ["1"]})
        values.delete("a")
        values.delete("missing")
        assert values == {}


class TestEncode:
    def test_empty(self):
        assert QueryValues().encode() == ""

    def test_insertion_order(self):
        values = QueryValues()
        values.add("z", "1")
        values.add("a", "2")
        values.add("z", "3")
        assert values.encode() == "z=1&z=3&a=2"
        assert list(values.pairs()) == [("z", "1"), ("z", "3"), ("a", "2")]

    def test_percent_encoding(self):
        values = QueryValues()
        values.add("filter[state]", "a b")
        values.add("q", "a+b=c&d")
        assert values.encode() == "filter%5Bstate%5D=a+b&q=a%2Bb%3Dc%26d"

    def test_empty_value(self):
        values = QueryValues()
        values.add("a", "")
        assert values.encode() == "a="


class TestParse:
    @pytest.mark.parametrize(
        "query, want",
        [
            ("", {}),
            ("?", {}),
            ("a", {"a": [""]}),
            ("a=", {"a": [""]}),
            ("a=1=2", {"a": ["1=2"]}),
            ("a=1&&b=2", {"a": ["1"], "b": ["2"]}),
            ("a=x+y&b=%21", {"a": ["x y"], "b": ["!"]}),
            ("a%5B%5D=1", {"a[]": ["1"]}),
        ],
    )
    def test_parse(self, query, want):
        assert QueryValues.parse(query) == want

    def test_returns_query_values(self):
        assert isinstance(QueryValues.parse("a=1"), QueryValues)

    def test_encoded_again_unchanged(self):
        query = "b=2&a=1&a=3"
        assert QueryValues.parse(query).encode() == query
