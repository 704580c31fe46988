"""Shared fixtures for the encoder tests."""
import pytest

from query.encode import QueryEncoder
from query.options import EncoderOptions, get_default_options, set_default_options


@pytest.fixture
def encoder():
    """Encoder with built-in options, independent of the environment."""
    return QueryEncoder(EncoderOptions())


@pytest.fixture
def restore_default_options():
    """Put the process-wide options back after a test swaps them."""
    saved = get_default_options()
    yield
    set_default_options(saved)
