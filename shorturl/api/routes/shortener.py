"""URL shortening endpoint."""

import logging
from typing import Union

from fastapi import APIRouter, Depends, Form, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.api import schemas
from shorturl.api.dependencies import get_shortener_service, get_hostname_validator
from shorturl.db.session import get_db
from shorturl.services.exceptions import URLCreationError
from shorturl.services.normalizer import normalize_url
from shorturl.services.shortener import ShortenedURLService
from shorturl.services.validator import HostnameValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorturl",
    response_model=Union[schemas.ShortURLResponse, schemas.InvalidURLResponse],
    status_code=status.HTTP_200_OK,
    responses={
        500: {"model": schemas.ErrorResponse, "description": "Short URL could not be stored"}
    }
)
async def create_short_url(
    url: str = Form(""),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
    validator: HostnameValidator = Depends(get_hostname_validator),
):
    """
    Shorten a URL submitted as a form field.

    A URL whose hostname does not resolve gets ``{"error": "invalid url"}``
    with a 200 status, and nothing is stored.
    """
    hostname = normalize_url(url)
    if not await validator.validate(hostname):
        return schemas.InvalidURLResponse()

    try:
        short_url = await shortener_service.get_or_create_short_url(db, url)
    except URLCreationError as e:
        logger.error(f"Shortening failed for {url!r}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create short URL")

    return schemas.ShortURLResponse(original_url=url, short_url=short_url)
