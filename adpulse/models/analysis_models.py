"""AdPulse — Dashboard Output Models.

Value objects handed to the presentation layer. None of them carry
formatting; rendering decides how numbers look.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel

from adpulse.models.records import AccountRecord, LastRunRecord, MetricRecord


class AggregateMetrics(BaseModel):
    """Sum of raw counters over a cohort, with ratios re-derived from the sums."""

    spend: float = 0.0
    impressions: float = 0.0
    reach: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    cpm: float = 0.0
    cpa: float = 0.0
    frequency: float = 0.0

    model_config = {"frozen": True}


class DeltaDirection(str, Enum):
    """Which way a metric moved between two snapshots."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class Delta(BaseModel):
    """Period-over-period change of one metric."""

    relative_change_percent: float
    direction: DeltaDirection
    is_favorable: bool

    model_config = {"frozen": True}


class KPICard(BaseModel):
    """One headline metric with its change against the previous snapshot."""

    metric: str
    label: str
    unit: str = ""
    value: float = 0.0
    delta: Optional[Delta] = None
    show_delta: bool = False

    model_config = {"frozen": True}


class AccountOverviewRow(BaseModel):
    """An active account joined with its latest snapshot row."""

    account_id: str
    account_name: str
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    ctr: float = 0.0
    conversions: float = 0.0
    cpa: float = 0.0

    model_config = {"frozen": True}


class TrendPoint(BaseModel):
    """Spend and clicks summed over one collection date."""

    date: str
    spend: float = 0.0
    clicks: float = 0.0

    model_config = {"frozen": True}


SortColumn = Literal[
    "campaign_name",
    "account_name",
    "spend",
    "impressions",
    "clicks",
    "ctr",
    "cpa",
    "conversions",
]

TEXT_SORT_COLUMNS = {"campaign_name", "account_name"}


class SortState(BaseModel):
    """Campaign table ordering. Owned by the caller, never stored globally."""

    column: SortColumn = "spend"
    ascending: bool = False

    model_config = {"frozen": True}

    def toggled(self, column: SortColumn) -> "SortState":
        """Flip direction on the same column; a new column starts descending."""
        if column == self.column:
            return SortState(column=column, ascending=not self.ascending)
        return SortState(column=column, ascending=False)


class DashboardView(BaseModel):
    """Everything the dashboard needs for one account selection."""

    account_id: str
    latest_date: str = ""
    previous_date: str = ""
    has_previous: bool = False
    snapshot_aligned: bool = True
    current: AggregateMetrics = AggregateMetrics()
    previous: AggregateMetrics = AggregateMetrics()
    kpis: List[KPICard] = []
    trend: List[TrendPoint] = []
    campaigns: List[MetricRecord] = []
    top_campaigns: List[MetricRecord] = []
    account_overview: List[AccountOverviewRow] = []
    account_spend: List[MetricRecord] = []
    sort: SortState = SortState()
    last_run: Optional[LastRunRecord] = None


class AccountsView(BaseModel):
    """Selectable accounts plus the one to open by default."""

    all_accounts_value: str
    default_account_id: str
    accounts: List[AccountRecord] = []
