import json
import logging
from typing import Any, Dict, Optional

import httpx

from .exceptions import DecodeError, TransportError

logger = logging.getLogger(__name__)

# --- Guwen API Communication ---

async def get_from_guwen(
    client: httpx.AsyncClient,
    endpoint: str,
    api_url: str,
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Performs a single GET request to a guwen API endpoint.

    Returns the decoded JSON body, or ``None`` when the body is empty.
    Raises ``TransportError`` for connectivity problems, timeouts and non-2xx
    responses, and ``DecodeError`` when the body is not valid JSON.
    """
    url = f"{api_url.rstrip('/')}/{endpoint}"
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        if status_code == 404:
            logger.info(f"Guwen API HTTP error for {url}: {status_code}")
        else:
            logger.error(f"Guwen API HTTP error for {url}: {status_code} {e.response.text}")
        raise TransportError(
            f"HTTP error: {status_code}",
            url=url,
            detail={"status_code": status_code, "params": params},
        ) from e
    except httpx.RequestError as e:
        logger.error(f"Guwen API request error for {url}: {e!r}")
        raise TransportError(
            f"Request error: {type(e).__name__}",
            url=url,
            detail={"params": params},
        ) from e

    if not response.content.strip():
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Guwen API returned malformed JSON for {url}: {e}")
        raise DecodeError(
            "Malformed JSON response",
            url=url,
            detail={"params": params},
        ) from e
