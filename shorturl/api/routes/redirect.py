"""URL redirection endpoint."""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from starlette.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.api.dependencies import get_shortener_service
from shorturl.db.session import get_db
from shorturl.services.shortener import ShortenedURLService
from shorturl.services.exceptions import URLNotFoundError, URLLookupError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The short URL provided doesn't exist in the database"

# short_url is a 32-bit INTEGER column
MAX_SHORT_URL = 2**31 - 1
SHORT_URL_PATTERN = re.compile(r"[0-9]+")

router = APIRouter(tags=["redirect"])


def parse_short_url(segment: str) -> Optional[int]:
    """Return the identifier in a path segment, or None if no record could hold it."""
    if not SHORT_URL_PATTERN.fullmatch(segment):
        return None
    value = int(segment)
    if value > MAX_SHORT_URL:
        return None
    return value


@router.get(
    "/shorturl/{short_url}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"description": "Short URL not found", "content": {"text/plain": {}}}
    }
)
async def redirect_to_original_url(
    short_url: str,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Redirect to the original URL stored under a short identifier."""
    short_id = parse_short_url(short_url)
    if short_id is None:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)

    try:
        original_url = await shortener_service.get_original_url(db, short_id)
    except URLNotFoundError:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)
    except URLLookupError as e:
        logger.error(f"Redirect lookup failed for short URL {short_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve short URL")

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
