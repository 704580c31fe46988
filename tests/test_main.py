"""Tests for the command line entry point."""
import io

import pytest

from main import main


@pytest.fixture(autouse=True)
def _default_options(restore_default_options):
    yield


def test_prints_query(capsys):
    assert main(['{"page": 1, "filter": {"state": "open"}}']) == 0
    assert capsys.readouterr().out == "page=1&filter%5Bstate%5D=open\n"


def test_pairs(capsys):
    assert main(['["a", "1", "b", "2"]']) == 0
    assert capsys.readouterr().out == "a=1&b=2\n"


def test_appends_to_url(capsys):
    assert main(['{"q": "a b"}', "--url", "https://example.com/api?x=1"]) == 0
    assert capsys.readouterr().out == "https://example.com/api?x=1&q=a+b\n"


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"a": "b"}'))
    assert main([]) == 0
    assert capsys.readouterr().out == "a=b\n"


def test_invalid_json(capsys):
    assert main(["{"]) == 2
    assert capsys.readouterr().out == ""


def test_unsupported_input(capsys):
    assert main(["42"]) == 1
    assert capsys.readouterr().out == ""


def test_max_depth(capsys):
    assert main(['{"a": {"b": "c"}}', "--max-depth", "0"]) == 1
    assert main(['{"a": {"b": "c"}}', "--max-depth", "1"]) == 0
    assert capsys.readouterr().out == "a%5Bb%5D=c\n"
