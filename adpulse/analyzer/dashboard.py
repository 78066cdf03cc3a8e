"""AdPulse — Dashboard Assembly.

Runs the full data flow for one account selection:
  filter by account → pick latest / previous snapshots → aggregate → deltas

Everything here is a pure function of the loaded data plus the caller's
selection and sort state. Nothing is cached between calls.
"""

from collections import defaultdict
from typing import Any, List, Literal, Optional, Sequence

from adpulse.config import settings
from adpulse.analyzer.account_filter import active_accounts, filter_by_account
from adpulse.analyzer.kpi_engine import aggregate
from adpulse.analyzer.snapshot_engine import (
    collection_dates,
    latest_date,
    previous_date,
    select_latest,
    select_on_date,
)
from adpulse.analyzer.trend_engine import compute_delta
from adpulse.core.metric_registry import KPI_METRICS, get_metric
from adpulse.models.analysis_models import (
    TEXT_SORT_COLUMNS,
    AccountOverviewRow,
    AggregateMetrics,
    DashboardView,
    KPICard,
    SortState,
    TrendPoint,
)
from adpulse.models.records import (
    AccountRecord,
    DashboardData,
    LastRunRecord,
    MetricRecord,
)
from adpulse.core.logging import get_logger

logger = get_logger("analyzer.dashboard")

SnapshotScope = Literal["filtered", "global"]


def build_kpi_cards(
    current: AggregateMetrics,
    previous: AggregateMetrics,
    has_previous: bool,
) -> List[KPICard]:
    """One card per headline metric.

    A delta is hidden when there is no previous snapshot (not computable)
    or when it is exactly zero (computed, but flat). CPA gets no delta at
    all while the current CPA is zero.
    """
    cards: List[KPICard] = []
    for name in KPI_METRICS:
        metric = get_metric(name)
        value = getattr(current, name)

        delta = None
        if not (name == "cpa" and value <= 0):
            delta = compute_delta(value, getattr(previous, name), metric.inverse_polarity)

        show = has_previous and delta is not None and delta.relative_change_percent != 0
        cards.append(
            KPICard(
                metric=name,
                label=metric.label,
                unit=metric.unit,
                value=value,
                delta=delta,
                show_delta=show,
            )
        )
    return cards


def build_account_overview(
    account_metrics: Sequence[MetricRecord],
    accounts: Sequence[AccountRecord],
) -> List[AccountOverviewRow]:
    """Active accounts with their latest snapshot row, by spend descending."""
    by_account = {r.account_id: r for r in select_latest(account_metrics)}

    rows: List[AccountOverviewRow] = []
    for account in active_accounts(accounts):
        m = by_account.get(account.account_id)
        rows.append(
            AccountOverviewRow(
                account_id=account.account_id,
                account_name=account.account_name,
                spend=m.spend if m else 0.0,
                impressions=m.impressions if m else 0.0,
                clicks=m.clicks if m else 0.0,
                ctr=m.ctr if m else 0.0,
                conversions=m.conversions if m else 0.0,
                cpa=m.cpa if m else 0.0,
            )
        )
    rows.sort(key=lambda r: r.spend, reverse=True)
    return rows


def account_spend_ranking(account_metrics: Sequence[MetricRecord]) -> List[MetricRecord]:
    """Latest account rows that spent anything, by spend descending."""
    latest = [r for r in select_latest(account_metrics) if r.spend > 0]
    return sorted(latest, key=lambda r: r.spend, reverse=True)


def top_campaigns(
    campaign_metrics: Sequence[MetricRecord], limit: Optional[int] = None
) -> List[MetricRecord]:
    """Latest campaign rows by spend descending, truncated to ``limit``."""
    limit = settings.top_campaigns_limit if limit is None else limit
    latest = sorted(select_latest(campaign_metrics), key=lambda r: r.spend, reverse=True)
    return latest[: max(limit, 0)]


def trend_series(account_metrics: Sequence[MetricRecord]) -> List[TrendPoint]:
    """Spend and clicks summed per collection date, oldest first."""
    spend: dict[str, float] = defaultdict(float)
    clicks: dict[str, float] = defaultdict(float)
    for r in account_metrics:
        spend[r.date_collected] += r.spend
        clicks[r.date_collected] += r.clicks

    return [
        TrendPoint(date=d, spend=spend[d], clicks=clicks[d])
        for d in collection_dates(account_metrics)
    ]


def _sort_key(column: str):
    if column in TEXT_SORT_COLUMNS:
        return lambda r: str(getattr(r, column, "") or "").lower()

    def numeric(r: MetricRecord) -> Any:
        return getattr(r, column, 0) or 0

    return numeric


def rank_campaigns(
    campaign_metrics: Sequence[MetricRecord], sort: SortState | None = None
) -> List[MetricRecord]:
    """Latest campaign rows ordered by the caller's sort state.

    Text columns compare case-insensitively; ties keep sheet order.
    """
    sort = sort or SortState()
    return sorted(
        select_latest(campaign_metrics),
        key=_sort_key(sort.column),
        reverse=not sort.ascending,
    )


def latest_run(last_run: Sequence[LastRunRecord]) -> Optional[LastRunRecord]:
    """The last row of the last-run marker sheet."""
    return last_run[-1] if last_run else None


def _snapshot_dates(
    scoped: Sequence[MetricRecord],
    everything: Sequence[MetricRecord],
    scope: SnapshotScope,
) -> tuple[Optional[str], Optional[str], bool]:
    """Resolve (latest, previous, aligned) for an account-filtered subset.

    "filtered" picks dates within the subset; "global" takes them from the
    unfiltered data. ``aligned`` says whether the two agree.
    """
    scoped_dates = (latest_date(scoped), previous_date(scoped))
    global_dates = (latest_date(everything), previous_date(everything))
    aligned = scoped_dates == global_dates

    if not aligned:
        logger.warning(
            f"Snapshot dates differ: subset {scoped_dates} vs global {global_dates} "
            f"(scope={scope})"
        )

    latest, previous = global_dates if scope == "global" else scoped_dates
    return latest, previous, aligned


def build_dashboard(
    data: DashboardData,
    account_id: Optional[str] = None,
    sort: SortState | None = None,
    snapshot_scope: SnapshotScope | None = None,
) -> DashboardView:
    """Assemble the full view for one account selection."""
    all_value = settings.all_accounts_value
    account_id = account_id or all_value
    scope = snapshot_scope or settings.snapshot_scope
    sort = sort or SortState()

    account_rows = filter_by_account(data.account_metrics, account_id)
    campaign_rows = filter_by_account(data.campaign_metrics, account_id)

    latest, previous, aligned = _snapshot_dates(
        account_rows, data.account_metrics, scope
    )
    current_cohort = select_on_date(account_rows, latest)
    previous_cohort = select_on_date(account_rows, previous)
    has_previous = len(previous_cohort) > 0

    current = aggregate(current_cohort)
    prior = aggregate(previous_cohort)

    is_all = account_id == all_value
    view = DashboardView(
        account_id=account_id,
        latest_date=latest or "",
        previous_date=previous or "",
        has_previous=has_previous,
        snapshot_aligned=aligned,
        current=current,
        previous=prior,
        kpis=build_kpi_cards(current, prior, has_previous),
        trend=trend_series(account_rows),
        campaigns=rank_campaigns(campaign_rows, sort),
        top_campaigns=[] if is_all else top_campaigns(campaign_rows),
        account_overview=(
            build_account_overview(data.account_metrics, data.accounts)
            if is_all
            else []
        ),
        account_spend=account_spend_ranking(data.account_metrics) if is_all else [],
        sort=sort,
        last_run=latest_run(data.last_run),
    )

    logger.info(
        f"Built dashboard: {len(current_cohort)} current rows, "
        f"{len(previous_cohort)} previous rows, {len(view.campaigns)} campaigns",
        extra={"account_id": account_id},
    )
    return view
