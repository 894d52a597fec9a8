"""Pytest configuration and shared fixtures."""
import os

import pytest
from fastapi.testclient import TestClient

# Keep get_gateway off the filesystem; tests inject their own gateways
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_api.db import SQLiteTodoGateway  # noqa: E402
from todo_api.gateways import InMemoryTodoGateway, get_gateway  # noqa: E402
from todo_api.main import app  # noqa: E402


@pytest.fixture(params=["memory", "sqlite"])
def client(request, tmp_path):
    """TestClient wired to a fresh gateway of each kind."""
    if request.param == "sqlite":
        backend = SQLiteTodoGateway(str(tmp_path / "api" / "todos.db"))
    else:
        backend = InMemoryTodoGateway()
    app.dependency_overrides[get_gateway] = lambda: backend
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(params=["memory", "sqlite"])
def gateway(request, tmp_path):
    """Each gateway implementation, freshly created."""
    if request.param == "sqlite":
        return SQLiteTodoGateway(str(tmp_path / "db" / "todos.db"))
    return InMemoryTodoGateway()
