from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from blogadmin.settings import Settings, settings

API_KEY_NAME = "X-Blog-Admin-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)
github_bearer = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_api_key(
    api_key_header: str = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
):
    if api_key_header and api_key_header == current_settings.ADMIN_API_KEY:
        return api_key_header
    raise HTTPException(
        status_code=HTTP_403_FORBIDDEN,
        detail="Could not validate API key",
    )


def get_github_token(
    credentials: HTTPAuthorizationCredentials = Security(github_bearer),
) -> str:
    """The repository credential, passed through per request and never stored."""
    if credentials and credentials.credentials:
        return credentials.credentials
    raise HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail="Missing repository credential",
        headers={"WWW-Authenticate": "Bearer"},
    )
