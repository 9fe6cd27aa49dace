from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient

from elevator_dispatch.app.main import app, fleet_service
from elevator_dispatch.models.elevator import Direction
from elevator_dispatch.models.fleet import Fleet
from elevator_dispatch.services.fleet import FleetService
from elevator_dispatch.services.sinks import EventSink

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest_asyncio.fixture
async def async_client():
    """Create an async client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def redis_client():
    """Create a FakeRedis client for testing."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def app_fleet():
    """Reset the application's fleet to 10 floors with cars at [0, 5]."""
    fleet_service.fleet.initialize(10, 2, [0, 5])
    yield fleet_service.fleet
    fleet_service.fleet.initialize(0, 0, [])


@pytest.fixture
def fleet():
    """Two elevators on ten floors, parked at floors 0 and 5."""
    fleet = Fleet()
    fleet.initialize(10, 2, [0, 5])
    return fleet


@pytest.fixture
def mock_sink():
    """Event sink that records what it receives."""
    return AsyncMock(spec=EventSink)


@pytest.fixture
def service(fleet, mock_sink):
    return FleetService(sinks=[mock_sink], fleet=fleet)


def assert_fleet_invariants(fleet: Fleet) -> None:
    """Check the queue and direction invariants of every elevator."""
    for elevator in fleet:
        up, down = elevator.up_queue, elevator.down_queue
        assert all(a < b for a, b in zip(up, up[1:])), elevator
        assert all(a > b for a, b in zip(down, down[1:])), elevator
        assert not set(up) & set(down), elevator
        assert (elevator.direction == Direction.IDLE) == (not up and not down), elevator


@pytest.fixture
def check_invariants():
    return assert_fleet_invariants
