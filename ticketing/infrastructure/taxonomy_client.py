"""Resilient Taxonomy Client: categories, tags and user-to-master resolution over HTTP.

Invariants:
    - Transient errors (5xx, connection, timeout): max_retries retries with exponential backoff
    - 404 on master lookup maps to MasterNotFoundError (propagated verbatim by use cases)
    - Any other failure maps to TaxonomyServiceError (core/errors.py), including
      a 200 whose payload lacks the expected fields
    - No caching: every call reflects what the service reports right now

Design Decisions:
    - httpx.AsyncClient owned by the wrapper, closed in the app lifespan
    - ±25% jitter on backoff: prevents thundering herd on a shared dependency
"""

import asyncio
import logging
import random
from contextlib import contextmanager
from datetime import datetime

import httpx

from ticketing.core.entities import Category, Master, Tag
from ticketing.core.errors import MasterNotFoundError, TaxonomyServiceError

logger = logging.getLogger(__name__)


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@contextmanager
def _decoding(path: str):
    """Map a payload of the wrong shape to TaxonomyServiceError(decode_error)."""
    try:
        yield
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise TaxonomyServiceError(
            f"GET {path} returned an unexpected payload: {e!r}", "decode_error",
        ) from e


class HttpTaxonomyClient:
    """Wraps httpx.AsyncClient with retry logic and error mapping."""

    def __init__(
        self,
        base_url: str,
        max_retries: int = 3,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5_000,
        timeout_seconds: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def get_all_categories(self) -> list[Category]:
        path = "/api/v1/categories"
        data = await self._get_collection(path)
        with _decoding(path):
            return [Category(id=item["id"], name=item["name"]) for item in data]

    async def get_all_tags(self) -> list[Tag]:
        path = "/api/v1/tags"
        data = await self._get_collection(path)
        with _decoding(path):
            return [Tag(id=item["id"], name=item["name"]) for item in data]

    async def get_master_by_user_id(self, user_id: int) -> Master:
        path = f"/api/v1/masters/users/{user_id}"
        try:
            data = await self._get_json(path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.NOT_FOUND:
                raise MasterNotFoundError(user_id) from e
            raise TaxonomyServiceError(str(e), "client_error") from e
        with _decoding(path):
            return Master(
                id=data["id"],
                user_id=data["user_id"],
                info=data.get("info"),
                created_at=_parse_datetime(data.get("created_at")),
                updated_at=_parse_datetime(data.get("updated_at")),
            )

    async def close(self) -> None:
        await self.client.aclose()

    async def _get_collection(self, path: str) -> list:
        try:
            return await self._get_json(path)
        except httpx.HTTPStatusError as e:
            raise TaxonomyServiceError(str(e), "client_error") from e

    async def _get_json(self, path: str):
        """GET with retry on transient failures. 4xx surfaces as httpx.HTTPStatusError."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.get(path)
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise
                await self._handle_transient_error(e, attempt, path)

            except httpx.TransportError as e:
                await self._handle_transient_error(e, attempt, path)

            except ValueError as e:
                raise TaxonomyServiceError(
                    f"GET {path} returned invalid JSON", "decode_error",
                ) from e

    async def _handle_transient_error(
        self, error: Exception, attempt: int, path: str,
    ) -> None:
        if attempt >= self.max_retries:
            raise TaxonomyServiceError(
                f"GET {path} failed after {attempt + 1} attempts: {error}",
                "connection_error",
            ) from error
        delay_ms = self._calculate_backoff(attempt)
        logger.warning(
            f"Taxonomy request {path} failed, retrying in {delay_ms}ms: {error}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay_ms / 1000)

    def _calculate_backoff(self, attempt: int) -> int:
        delay = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))
