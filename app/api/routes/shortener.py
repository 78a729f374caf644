"""Endpoints for creating, listing and deleting the caller's short URLs."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import schemas
from app.api.dependencies import get_shortener_service, require_principal_id
from app.db.session import get_db
from app.services.shortener import ShortenedURLService
from app.services.exceptions import (
    InvalidURLError,
    URLCreationError,
    URLDeletionError,
    URLNotFoundError,
    URLOwnershipError,
)

router = APIRouter(tags=["shortener"])

UNAUTHORIZED_RESPONSE = {"model": schemas.ErrorResponse, "description": "Missing or invalid bearer token"}


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: UNAUTHORIZED_RESPONSE,
        422: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        500: {"model": schemas.ErrorResponse, "description": "No short code could be allocated"},
    }
)
async def create_short_url(
    url_data: schemas.URLCreateRequest,
    principal_id: int = Depends(require_principal_id),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    try:
        short_url = await shortener_service.shorten(
            db=db,
            original_url=url_data.url,
            owner_id=principal_id
        )
    except InvalidURLError:
        raise HTTPException(
            status_code=422,
            detail="The url must be a valid URL."
        )
    except URLCreationError as e:
        logger.error("Short URL creation failed", user_id=principal_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An error occurred while shortening the URL.", "error": str(e)}
        )
    return schemas.ShortenResponse(short_url=short_url)


@router.get(
    "/urls",
    response_model=List[schemas.URLResponse],
    responses={401: UNAUTHORIZED_RESPONSE}
)
async def list_urls(
    principal_id: int = Depends(require_principal_id),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    urls = await shortener_service.list_urls_for_owner(db=db, owner_id=principal_id)
    return [schemas.URLResponse.model_validate(url) for url in urls]


@router.delete(
    "/urls/{url_id}",
    response_model=schemas.MessageResponse,
    responses={
        401: UNAUTHORIZED_RESPONSE,
        403: {"model": schemas.ErrorResponse, "description": "URL belongs to another user"},
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
        500: {"model": schemas.ErrorResponse, "description": "Deletion failed"},
    }
)
async def delete_url(
    url_id: int = Path(..., description="The id of the URL to delete"),
    principal_id: int = Depends(require_principal_id),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    try:
        await shortener_service.delete_url(db=db, url_id=url_id, requester_id=principal_id)
    except URLNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    except URLOwnershipError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    except URLDeletionError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An error occurred while deleting the URL.", "error": str(e)}
        )
    return schemas.MessageResponse(message="URL deleted successfully")
