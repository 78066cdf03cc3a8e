"""AdPulse — Published Sheet Client.

Handles retry logic and rate limiting for the gviz query endpoint.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

import httpx

from adpulse.config import Settings, settings as default_settings
from adpulse.connectors.sheets.table_parser import parse_response
from adpulse.core.errors import FetchError
from adpulse.core.logging import get_logger

logger = get_logger("sheets.client")


class SheetsClient:
    """Async HTTP client for a spreadsheet published to the web."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or default_settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.http_timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _backoff(self, attempt: int) -> float:
        return self.config.retry_base_delay * (2 ** (attempt - 1))

    # ── Core Request Method ──

    async def fetch_sheet(self, sheet_name: str) -> str:
        """Fetch one sheet tab and return the raw response body."""
        url = self.config.sheet_url(sheet_name)
        client = await self._get_client()
        max_retries = max(self.config.max_retries, 1)
        started = time.monotonic()

        for attempt in range(1, max_retries + 1):
            try:
                resp = await client.get(url)

                # Rate limited / transient upstream failure
                if resp.status_code == 429 or resp.status_code >= 500:
                    if attempt < max_retries:
                        wait = self._backoff(attempt)
                        logger.warning(
                            f"Sheet {sheet_name!r} returned {resp.status_code}. "
                            f"Retrying in {wait}s (attempt {attempt}/{max_retries})",
                            extra={"sheet": sheet_name, "status_code": resp.status_code},
                        )
                        await asyncio.sleep(wait)
                        continue

                if not resp.is_success:
                    raise FetchError(
                        f'Failed to fetch sheet "{sheet_name}": {resp.status_code}',
                        sheet_name,
                        resp.status_code,
                    )

                logger.info(
                    f"Fetched sheet {sheet_name!r}",
                    extra={
                        "sheet": sheet_name,
                        "status_code": resp.status_code,
                        "duration_ms": round((time.monotonic() - started) * 1000, 1),
                    },
                )
                return resp.text

            except httpx.RequestError as e:
                if attempt < max_retries:
                    wait = self._backoff(attempt)
                    logger.warning(
                        f"Request error: {e}. Retrying in {wait}s",
                        extra={"sheet": sheet_name},
                    )
                    await asyncio.sleep(wait)
                    continue
                raise FetchError(
                    f'Failed to fetch sheet "{sheet_name}" after '
                    f"{max_retries} attempts: {e}",
                    sheet_name,
                ) from e

        raise FetchError(f'Failed to fetch sheet "{sheet_name}"', sheet_name)

    async def fetch_table(self, sheet_name: str) -> List[Dict[str, Any]]:
        """Fetch one sheet tab and flatten it into row dicts."""
        text = await self.fetch_sheet(sheet_name)
        return parse_response(text, sheet_name)
