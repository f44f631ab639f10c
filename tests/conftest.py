import pytest
from fastapi.testclient import TestClient

from timer_api.main import create_app
from timer_api.repositories import InMemoryRepository
from timer_api.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(persistence_backend="memory", log_level="DEBUG")


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def client(settings, repository):
    # Entering the client runs the app lifespan (repository open/close)
    with TestClient(create_app(settings, repository)) as c:
        yield c
