from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator, Optional

import httpx

from .settings import Settings
from .logging_config import setup_logging
from guwen_reader.services.browse import BrowseSession, DetailResolver
from guwen_reader.services.guwen_service import GuwenService

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SEC),
        limits=httpx.Limits(max_connections=1, max_keepalive_connections=1),
        headers={"User-Agent": settings.HTTP_USER_AGENT},
    )


@asynccontextmanager
async def browse_lifespan(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[BrowseSession]:
    """Wire settings, logging and the HTTP client into a ready ``BrowseSession``."""
    settings = settings or Settings()
    setup_logging(settings)

    owns_client = http_client is None
    client = http_client or create_http_client(settings)
    guwen_service = GuwenService(client, settings.GUWEN_API_URL)
    session = BrowseSession(guwen_service, DetailResolver(guwen_service))
    logger.info(f"Browse session {session.session_id} ready against {settings.GUWEN_API_URL}")

    try:
        yield session
    finally:
        if owns_client:
            await client.aclose()
        logger.info(f"Browse session {session.session_id} closed")
