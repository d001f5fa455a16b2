import importlib
import os
import sys

import pytest


def _cleanup_main_module():
    sys.modules.pop("foursome.main", None)


@pytest.fixture(autouse=True)
def app_import_isolation(monkeypatch):
    app_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    _cleanup_main_module()
    monkeypatch.syspath_prepend(app_path)
    try:
        yield
    finally:
        _cleanup_main_module()


def test_rejects_wildcard_with_credentials(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "true")
    with pytest.raises(ValueError):
        importlib.import_module("foursome.main")


def test_requires_allowed_origins(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("ALLOW_CREDENTIALS", raising=False)
    with pytest.raises(ValueError):
        importlib.import_module("foursome.main")


def test_blank_origins_are_rejected(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " , ")
    with pytest.raises(ValueError):
        importlib.import_module("foursome.main")


def test_preflight_allows_configured_origin(monkeypatch):
    from fastapi.testclient import TestClient

    monkeypatch.setenv("ALLOWED_ORIGINS", "http://scores.example")
    main = importlib.import_module("foursome.main")
    client = TestClient(main.app)
    resp = client.options(
        "/api/v0/awards",
        headers={
            "Origin": "http://scores.example",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://scores.example"
