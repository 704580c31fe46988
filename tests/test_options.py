"""Tests for encoder options and the process-wide default."""
import logging

import pytest

import config
from query import encode as encode_module
from query.options import (
    EncoderOptions,
    bracket_join,
    dot_join,
    get_default_options,
    set_default_options,
    set_scope_join,
)


def test_joins():
    assert bracket_join("user", "name") == "user[name]"
    assert dot_join("user", "name") == "user.name"


class TestFromConfig:
    def test_defaults(self):
        options = EncoderOptions.from_config()
        assert options.tag_names == config.TAG_NAMES
        assert options.max_depth == config.MAX_DEPTH

    def test_dots(self, monkeypatch):
        monkeypatch.setattr(config, "SCOPE_STYLE", "dots")
        assert EncoderOptions.from_config().scope_join is dot_join

    def test_unknown_style_warns(self, monkeypatch, caplog):
        monkeypatch.setattr(config, "SCOPE_STYLE", "colons")
        with caplog.at_level(logging.WARNING, logger="query.options"):
            options = EncoderOptions.from_config()
        assert options.scope_join is bracket_join
        assert "colons" in caplog.text

    def test_max_depth(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_DEPTH", 4)
        assert EncoderOptions.from_config().max_depth == 4


@pytest.mark.usefixtures("restore_default_options")
class TestDefaultOptions:
    def test_stable(self):
        assert get_default_options() is get_default_options()

    def test_set_default_options(self):
        options = EncoderOptions(scope_join=dot_join)
        set_default_options(options)
        assert get_default_options() is options
        assert encode_module.encode({"a": {"b": "c"}}) == {"a.b": ["c"]}

    def test_set_scope_join_keeps_other_settings(self):
        set_default_options(EncoderOptions(max_depth=3))
        set_scope_join(dot_join)
        options = get_default_options()
        assert options.scope_join is dot_join
        assert options.max_depth == 3

    def test_explicit_options_win(self):
        set_scope_join(dot_join)
        encoder = encode_module.QueryEncoder(EncoderOptions())
        assert encoder.encode({"a": {"b": "c"}}) == {"a[b]": ["c"]}
