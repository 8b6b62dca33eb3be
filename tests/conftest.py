import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Tests that call configure_logging bind handlers to pytest's capture streams;
    restore the defaults so later tests don't write to closed streams.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)
