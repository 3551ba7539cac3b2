import pytest

from unit_convert.core.units import UnitConverter, UnitRegistry
from unit_convert.infrastructure.logging.session_logger import shutdown_logging


@pytest.fixture
def registry():
    return UnitRegistry()


@pytest.fixture
def converter(registry):
    return UnitConverter(registry)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()
