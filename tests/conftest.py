"""Shared fixtures: an app per test, storing under tmp_path."""
import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from api.main import create_app

TOKEN = "test-secret"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF = b"%PDF-1.4\n%%EOF\n"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        token_key=TOKEN,
        base_url="http://files.test",
        media_dir=tmp_path / "media",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def upload_dir(settings):
    return settings.upload_dir


def stored_names(directory):
    return sorted(p.name for p in directory.iterdir())
