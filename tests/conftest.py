"""Shared fixtures and markers for metaph tests."""

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "db: requires PostgreSQL connection")


@pytest.fixture
def sample_words():
    """Small word list with known sound-alike groups."""
    return ["knewmoania", "pneumonia", "Smith", "Schmidt", "Smyth", "Thomas"]
