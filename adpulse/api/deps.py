"""AdPulse — Request Dependencies."""

from typing import AsyncIterator

from adpulse.connectors.sheets.client import SheetsClient


async def get_sheets_client() -> AsyncIterator[SheetsClient]:
    """Dependency — yields a sheet client, closed after the request."""
    client = SheetsClient()
    try:
        yield client
    finally:
        await client.close()
