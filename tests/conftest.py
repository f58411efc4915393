"""Shared pytest fixtures for service, store, and API tests."""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shortener.dependencies import ServiceManager, _service_manager
from shortener.main import app
from shortener.service import ShorteningService
from shortener.storage import InMemoryMappingStore


@pytest.fixture
def store() -> InMemoryMappingStore:
    return InMemoryMappingStore()


@pytest.fixture
def service(store: InMemoryMappingStore) -> ShorteningService:
    return ShorteningService(store)


@pytest.fixture
def service_manager(store: InMemoryMappingStore) -> Generator[ServiceManager, None, None]:
    """Fresh store and counter for every test; the store is the `store` fixture."""
    _service_manager.cleanup()
    _service_manager.initialize(store=store)
    yield _service_manager
    _service_manager.cleanup()


@pytest_asyncio.fixture(scope="function")
async def client(service_manager: ServiceManager) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
