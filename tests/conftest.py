"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['IMGDHASH_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    for logger_name in ['imgdhash.hash', 'imgdhash.loader', 'imgdhash.cli']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep IMGDHASH_* settings from the outer environment out of tests."""
    for name in ['IMGDHASH_RESAMPLE', 'IMGDHASH_LUMINANCE', 'IMGDHASH_THRESHOLD', 'IMGDHASH_HEX']:
        monkeypatch.delenv(name, raising=False)
