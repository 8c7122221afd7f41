"""
Pytest configuration for unit tests.

Keeps unit tests hermetic: no API keys or settings leak in from the
developer's environment.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch, tmp_path):
    """Clear BOOK_AVAILABILITY_* variables and run away from any local .env file."""
    for name in list(os.environ):
        if name.startswith("BOOK_AVAILABILITY_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
