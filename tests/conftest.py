import pytest
from unittest.mock import Mock

from stepdrill.modules.logging import BaseLogger
from stepdrill.modules.step.context import RunContext


@pytest.fixture
def mock_logger():
    return Mock(spec=BaseLogger)


@pytest.fixture
def run_context():
    return RunContext()
