"""
Shared test fixtures
"""

import pytest
from loguru import logger


@pytest.fixture
def reset_logger():
    """Drop loguru sinks bound to pytest's capture streams"""
    yield
    logger.remove()
