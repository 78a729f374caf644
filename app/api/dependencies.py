"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access service instances and the calling user's identity.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security import decode_access_token
from app.repositories.url_repository import URLRepository
from app.services.codes import ShortCodeGenerator
from app.services.shortener import ShortenedURLService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_url_repository():
    """Get an instance of the URL repository."""
    return URLRepository()


async def get_code_generator():
    """Get a short code generator configured from settings."""
    return ShortCodeGenerator()


def get_base_url():
    """Get the base URL for shortened links."""
    return settings.BASE_URL


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
    code_generator: ShortCodeGenerator = Depends(get_code_generator),
    base_url: str = Depends(get_base_url),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(
        url_repository=url_repo,
        code_generator=code_generator,
        base_url=base_url,
    )


async def get_current_principal_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[int]:
    """Id of the user behind the bearer token, None for anonymous requests."""
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


async def require_principal_id(
    principal_id: Optional[int] = Depends(get_current_principal_id),
) -> int:
    """Id of the calling user; rejects anonymous requests with 401."""
    if principal_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal_id
