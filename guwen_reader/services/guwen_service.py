import logging
from typing import Any

import httpx
from pydantic import ValidationError

from guwen_reader.core.exceptions import DecodeError, InvalidInput, NotFoundError, TransportError
from guwen_reader.core.utils import get_from_guwen
from guwen_reader.models.browsing import BrowsingMethod, PageEnvelope, list_query
from guwen_reader.models.guwen_models import FullRecord, ListPayload

logger = logging.getLogger(__name__)


def _validate_page(page: Any) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidInput(
            f"Page number must be a positive integer, got {page!r}",
            detail={"page": page},
        )
    return page


class GuwenService:
    """Client for the guwen collection API: one GET per call, no retries."""

    def __init__(self, http_client: httpx.AsyncClient, guwen_api_url: str):
        self.http_client = http_client
        self.api_url = guwen_api_url

    async def fetch_page(self, method: BrowsingMethod, page: int) -> PageEnvelope:
        page = _validate_page(page)
        endpoint, params = list_query(method, page)

        logger.info(f"GUWEN_SERVICE: Fetching {endpoint} with params: {params}")
        raw_result = await get_from_guwen(self.http_client, endpoint, api_url=self.api_url, params=params)
        if raw_result is None:
            raise DecodeError("Empty body from list endpoint", detail={"endpoint": endpoint, "params": params})

        try:
            payload = ListPayload.model_validate(raw_result)
        except ValidationError as e:
            logger.error(f"GUWEN_SERVICE: Unexpected list payload from {endpoint}: {e.error_count()} errors")
            raise DecodeError(
                "List payload does not match the expected envelope",
                detail={"endpoint": endpoint, "params": params, "errors": e.errors(include_url=False)},
            ) from e

        if payload.page != page:
            logger.debug({"page_echo_mismatch": {"requested": page, "returned": payload.page}})

        logger.info(
            f"GUWEN_SERVICE: Page {page} of {endpoint} holds {len(payload.data)} items "
            f"(total={payload.total}, pages={payload.pages})"
        )
        return PageEnvelope(
            total=payload.total,
            page_count=payload.pages,
            page_number=page,
            page_size=payload.pagesize,
            method=method,
            items=tuple(payload.data),
        )

    async def fetch_detail(self, record_id: str) -> FullRecord:
        params = {"id": record_id}
        logger.info(f"GUWEN_SERVICE: Fetching record '{record_id}'")
        try:
            raw_result = await get_from_guwen(self.http_client, "selectbyid", api_url=self.api_url, params=params)
        except TransportError as e:
            if e.detail.get("status_code") == 404:
                raise NotFoundError(f"Record not found for '{record_id}'", url=e.url, detail=params) from e
            raise

        # An unmatched id comes back as an empty body, ``null`` or ``{}``.
        if not raw_result:
            logger.warning(f"GUWEN_SERVICE: No record for '{record_id}'")
            raise NotFoundError(f"Record not found for '{record_id}'", detail=params)

        try:
            return FullRecord.model_validate(raw_result)
        except ValidationError as e:
            logger.error(f"GUWEN_SERVICE: Unexpected record payload for '{record_id}': {e.error_count()} errors")
            raise DecodeError(
                "Record payload does not match the expected schema",
                detail={"id": record_id, "errors": e.errors(include_url=False)},
            ) from e
