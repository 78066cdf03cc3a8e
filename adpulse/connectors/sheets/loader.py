"""AdPulse — Dashboard Data Loader.

Fetches the four source sheets concurrently. All four must succeed; the
first failure cancels the remaining fetches and fails the whole load.
"""

import asyncio

from adpulse.connectors.sheets.client import SheetsClient
from adpulse.connectors.sheets.transformer import (
    to_accounts,
    to_last_run,
    to_metric_records,
)
from adpulse.models.records import DashboardData
from adpulse.core.logging import get_logger

logger = get_logger("sheets.loader")


async def load_dashboard_data(client: SheetsClient) -> DashboardData:
    """Load accounts, account metrics, campaign metrics and the last-run marker."""
    config = client.config
    tasks = [
        asyncio.ensure_future(client.fetch_table(name))
        for name in (
            config.accounts_sheet,
            config.account_metrics_sheet,
            config.campaign_metrics_sheet,
            config.last_run_sheet,
        )
    ]
    try:
        accounts, account_metrics, campaign_metrics, last_run = await asyncio.gather(
            *tasks
        )
    except BaseException:
        # Stop sibling fetches before the caller closes the shared client
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    data = DashboardData(
        accounts=to_accounts(accounts),
        account_metrics=to_metric_records(account_metrics),
        campaign_metrics=to_metric_records(campaign_metrics),
        last_run=to_last_run(last_run),
    )
    logger.info(
        f"Loaded {len(data.accounts)} accounts, "
        f"{len(data.account_metrics)} account rows, "
        f"{len(data.campaign_metrics)} campaign rows"
    )
    return data
