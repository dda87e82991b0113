import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient

from liftsim.app.main import app, get_controller
from liftsim.config.settings import ElevatorSettings
from liftsim.controller.controller import ElevatorController
from liftsim.libs.messaging.request_stream import MemoryRequestStream
from liftsim.models.elevator import Elevator

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def settings():
    """Two elevators over floors 1-10 with a fast loop."""
    return ElevatorSettings(elevatorsQuantity=2, tickIntervalMs=10)


@pytest.fixture
def request_stream():
    return MemoryRequestStream()


@pytest.fixture
def controller(settings, request_stream):
    """Controller with an initialized fleet reading from an in-memory stream."""
    controller = ElevatorController(settings, request_stream)
    controller.initialize_elevators()
    return controller


@pytest.fixture
def make_elevator():
    """Build an elevator parked at a given floor."""

    def _make(elevator_id=1, floor=1, min_floor=1, max_floor=10):
        elevator = Elevator(elevator_id, min_floor=min_floor, max_floor=max_floor)
        elevator.current_floor = floor
        return elevator

    return _make


@pytest_asyncio.fixture
async def redis_client():
    """Create a FakeRedis client for testing."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()


@pytest_asyncio.fixture
async def async_client(controller):
    """Create an async client for the API, bound to the ``controller`` fixture.

    ASGITransport does not run the lifespan, so the controller dependency is
    overridden instead.
    """
    original_overrides = app.dependency_overrides.copy()
    app.dependency_overrides[get_controller] = lambda: controller
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides = original_overrides
