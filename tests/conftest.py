"""
Global pytest configuration and fixtures.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_caconf_env():
    """Keep CACONF_* settings from the developer's shell out of the tests."""
    saved = {key: value for key, value in os.environ.items() if key.startswith("CACONF_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [key for key in os.environ if key.startswith("CACONF_")]:
        del os.environ[key]
    os.environ.update(saved)
