# ABOUTME: Shared fixtures for cache, source and aggregator tests
# ABOUTME: In-memory cache storage driven by a controllable clock, plus log routing reset

import pytest
import structlog
from loguru import logger

from crewbase.cache import CacheManager, MemoryStorage
from crewbase.models import RoleCatalog
from tests.helpers import FakeClock


@pytest.fixture(autouse=True)
def reset_log_routing():
    """Drop loguru sinks and structlog config a test installed via configure_logging."""
    yield
    structlog.reset_defaults()
    logger.remove()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cache(storage: MemoryStorage, clock: FakeClock) -> CacheManager:
    return CacheManager(storage, ttl_seconds=3600, clock=clock)


@pytest.fixture
def catalog() -> RoleCatalog:
    return RoleCatalog(crewmate={"Engineer": "Fixes things"}, impostor={"Janitor": "Cleans bodies"})
