import secrets
from typing import Optional
from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.config import Settings
from api.dependencies import current_settings
from api.errors import Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


def token_matches(header: Optional[str], token_key: str) -> bool:
    """Exact comparison of the raw header against ``Bearer <token_key>``."""
    if not header or not token_key:
        return False
    return secrets.compare_digest(header.encode(), f"Bearer {token_key}".encode())


def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    settings: Settings = Depends(current_settings),
) -> None:
    header = request.headers.get("authorization")
    if credentials is None or not token_matches(header, settings.token_key):
        raise Unauthorized("Unauthorized access")
