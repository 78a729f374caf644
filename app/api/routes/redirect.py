"""URL redirection endpoints.

The same lookup is served under the API prefix and at the site root.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from app.api import schemas
from app.api.dependencies import get_shortener_service
from app.db.session import get_db
from app.services.shortener import ShortenedURLService
from app.services.exceptions import URLNotFoundError

# Mounted under the API prefix
router = APIRouter(tags=["redirect"])

# Mounted at the site root
root_router = APIRouter(tags=["redirect"])

NOT_FOUND_RESPONSE = {404: {"model": schemas.ErrorResponse, "description": "Short URL not found"}}


async def _redirect(
    request: Request,
    short_code: str,
    db: AsyncSession,
    shortener_service: ShortenedURLService
) -> RedirectResponse:
    try:
        original_url = await shortener_service.resolve(db, short_code)
    except URLNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Short URL not found")

    logger.info(
        "Redirecting {short_code}",
        short_code=short_code,
        ip=request.client.host if request.client else "unknown",
    )
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/redirect/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses=NOT_FOUND_RESPONSE
)
async def redirect_to_original_url(
    request: Request,
    short_code: str,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """Redirect to the original URL behind a short code."""
    return await _redirect(request, short_code, db, shortener_service)


@root_router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses=NOT_FOUND_RESPONSE
)
async def redirect_short_url(
    request: Request,
    short_code: str,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """Redirect a root level short URL to its original URL."""
    return await _redirect(request, short_code, db, shortener_service)
