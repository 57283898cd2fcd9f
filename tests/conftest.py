"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from ui.app import create_app
from rovers.engine import SimulationEngine
from rovers.plateau import Plateau
from rovers.entities import Rover
from config import Config, LoggingConfig, RoverConfig


@pytest.fixture
def plateau():
    """Create a 5x5 test plateau."""
    return Plateau(max_x=5, max_y=5)


@pytest.fixture
def rover():
    """Create a test rover in the middle of the plateau."""
    return Rover(x=2, y=2, heading="N")


@pytest.fixture
def rover_config():
    return RoverConfig(unknown_instructions="reject")


@pytest.fixture
def engine(rover_config):
    """Create test simulation engine."""
    return SimulationEngine(config=rover_config)


@pytest.fixture
def app_config(tmp_path):
    """Config that keeps log files inside the test's tmp dir."""
    return Config(logging=LoggingConfig(file=str(tmp_path / "rovers.log"),
                                        crash_file=str(tmp_path / "crash.log")))


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
