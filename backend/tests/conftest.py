import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# foursome.main refuses to import without explicit CORS origins
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
os.environ.setdefault("DISABLE_RATE_LIMITS", "true")

from fastapi.testclient import TestClient  # noqa: E402

from foursome.state import EventBoard, get_event_board  # noqa: E402


@pytest.fixture
def board() -> EventBoard:
    """A fresh sample board per test so endpoint writes never leak."""
    return EventBoard.from_sample()


@pytest.fixture
def client(board):
    from foursome.main import app

    app.dependency_overrides[get_event_board] = lambda: board
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
