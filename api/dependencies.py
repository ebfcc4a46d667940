"""Request-scoped accessors for state built at startup."""
from fastapi import Request

from api.config import Settings
from storage.local import LocalFileStore


def current_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> LocalFileStore:
    return request.app.state.store
