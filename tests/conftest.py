import logging
import pytest

@pytest.fixture(autouse=True)
def reset_cachecheck_logger():
    """CLI runs bind the logger to CliRunner's stderr; drop it afterwards."""
    yield
    logger = logging.getLogger("cachecheck")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
