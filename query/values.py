"""
Ordered multimap of query parameter keys to string values.
"""
from typing import Dict, Iterator, List, Tuple
from urllib.parse import parse_qsl, urlencode


class QueryValues(Dict[str, List[str]]):
    """
    Query parameters keyed by name, each holding a list of string values.

    Keys keep their insertion order and so do the values of each key. Being a
    plain ``dict`` of lists, an instance can be passed as ``params=`` to
    ``requests`` directly.
    """

    def add(self, key: str, value: str):
        """Append a value to the list stored under key."""
        self.setdefault(key, []).append(value)

    def set(self, key: str, value: str):
        """Replace every value stored under key with a single value."""
        self[key] = [value]

    def get_first(self, key: str, default: str = "") -> str:
        """Return the first value stored under key, or default."""
        values = self.get(key)
        if not values:
            return default
        return values[0]

    def delete(self, key: str):
        """Remove key and its values; missing keys are ignored."""
        self.pop(key, None)

    def pairs(self) -> Iterator[Tuple[str, str]]:
        """Yield (key, value) pairs in insertion order."""
        for key, values in self.items():
            for value in values:
                yield key, value

    def encode(self) -> str:
        """
        Render the values as a URL query string.

        Keys and values are percent-encoded form style (space becomes ``+``)
        and pairs are joined with ``&``.

        Returns:
            Query string without a leading ``?``
        """
        return urlencode(list(self.pairs()))

    @classmethod
    def parse(cls, query: str) -> "QueryValues":
        """
        Parse an already formed query string.

        Leading ``?`` characters are stripped, pairs are split on ``&`` and
        then on the first ``=``. A pair without ``=`` yields an empty value.

        Args:
            query: Query string, with or without leading ``?``

        Returns:
            Parsed query values
        """
        values = cls()
        for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
            values.add(key, value)
        return values
