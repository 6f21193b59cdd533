"""Shared fixtures for gqlbundle tests."""

import itertools
import textwrap

import pytest
from loguru import logger

_counter = itertools.count()


@pytest.fixture(autouse=True)
def quiet_library_logs():
    """Restore the library default (logging disabled) after every test."""
    yield
    logger.disable("gqlbundle")


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    logger.enable("gqlbundle")
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def schema_package(tmp_path):
    """Write an importable Python module into ``tmp_path`` and return its name.

    Every call gets a unique module name so that ``sys.modules`` caching does
    not leak state between tests.
    """

    def write(source: str) -> str:
        name = f"schema_modules_{next(_counter)}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        return name

    return write
