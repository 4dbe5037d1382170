import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI attaches a handler bound to the stream of the test runner, drop it after each test."""
    yield
    logger = logging.getLogger("gesture_carousel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
