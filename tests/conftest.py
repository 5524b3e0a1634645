"""Pytest configuration and shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _quiet_logs(caplog):
    """Capture INFO logs so tests can assert on them without noisy output."""
    caplog.set_level(logging.INFO, logger="src")
    return caplog
