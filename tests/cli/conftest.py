import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI installs a handler bound to CliRunner's stderr; drop it afterwards."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if type(handler) is logging.StreamHandler:
            root_logger.removeHandler(handler)
            handler.close()
    structlog.reset_defaults()
