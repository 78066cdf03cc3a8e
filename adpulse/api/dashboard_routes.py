"""AdPulse — Dashboard API Routes.

Every request reloads the sheets; nothing is kept between requests.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from adpulse.config import settings
from adpulse.analyzer.account_filter import (
    active_accounts,
    default_account_id,
    filter_by_account,
)
from adpulse.analyzer.dashboard import build_dashboard, rank_campaigns
from adpulse.api.deps import get_sheets_client
from adpulse.connectors.sheets.client import SheetsClient
from adpulse.connectors.sheets.loader import load_dashboard_data
from adpulse.core.errors import SheetDataError
from adpulse.models.analysis_models import (
    AccountsView,
    DashboardView,
    SortColumn,
    SortState,
)
from adpulse.models.records import DashboardData, MetricRecord
from adpulse.core.logging import get_logger

logger = get_logger("api.dashboard")

router = APIRouter(tags=["Dashboard"])


async def _load(client: SheetsClient) -> DashboardData:
    try:
        return await load_dashboard_data(client)
    except SheetDataError as e:
        logger.error(f"Dashboard data load failed: {e}", extra={"sheet": e.sheet})
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/accounts", response_model=AccountsView)
async def get_accounts(client: SheetsClient = Depends(get_sheets_client)):
    """Active accounts for the selector, plus the one to open first."""
    data = await _load(client)
    return AccountsView(
        all_accounts_value=settings.all_accounts_value,
        default_account_id=default_account_id(data.accounts),
        accounts=active_accounts(data.accounts),
    )


@router.get("/dashboard", response_model=DashboardView)
async def get_dashboard(
    account_id: Optional[str] = Query(
        None, description="Account id, or the all-accounts value. Defaults to the first active account."
    ),
    sort_column: SortColumn = Query("spend"),
    ascending: bool = Query(False),
    client: SheetsClient = Depends(get_sheets_client),
):
    """KPIs with deltas, trend, campaign ranking and account overview."""
    data = await _load(client)
    selected = account_id or default_account_id(data.accounts)
    return build_dashboard(
        data,
        account_id=selected,
        sort=SortState(column=sort_column, ascending=ascending),
    )


@router.get("/campaigns", response_model=List[MetricRecord])
async def get_campaigns(
    account_id: str = Query(settings.all_accounts_value),
    sort_column: SortColumn = Query("spend"),
    ascending: bool = Query(False),
    client: SheetsClient = Depends(get_sheets_client),
):
    """Latest campaign rows for an account, in the requested order."""
    data = await _load(client)
    rows = filter_by_account(data.campaign_metrics, account_id)
    return rank_campaigns(rows, SortState(column=sort_column, ascending=ascending))
