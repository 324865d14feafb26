"""Shared test fixtures for all tests.

This file re-exports fixtures from the fixtures/ module so that they are
discovered by pytest for every test.
"""

import pytest

from tests.fixtures.config import (  # noqa: F401
    clean_env,
    default_settings,
    readonly_settings,
    sandboxed_settings,
)
from tests.fixtures.files import five_line_file, forty_line_file, sample_tree  # noqa: F401


@pytest.fixture(autouse=True)
def isolated_environment(clean_env, tmp_path, monkeypatch):
    """Keep tests away from the developer's settings, .env and log directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
