"""AdPulse — KPI Engine.

Sums raw counters across a cohort and re-derives CTR, CPC, CPM, CPA and
frequency from those sums. Per-row ratios are never summed or averaged:
the ratio of sums is not the mean of ratios.
"""

import math
from typing import Dict, Sequence

from adpulse.models.analysis_models import AggregateMetrics
from adpulse.models.records import COUNTER_FIELDS, MetricRecord
from adpulse.core.logging import get_logger

logger = get_logger("analyzer.kpi")


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    return (numerator / denominator * scale) if denominator > 0 else 0.0


def derive_ratios(totals: Dict[str, float]) -> Dict[str, float]:
    """Compute the derived metrics from summed counters."""
    spend = totals.get("spend", 0.0)
    impressions = totals.get("impressions", 0.0)
    reach = totals.get("reach", 0.0)
    clicks = totals.get("clicks", 0.0)
    conversions = totals.get("conversions", 0.0)

    return {
        "ctr": _ratio(clicks, impressions, 100),
        "cpc": _ratio(spend, clicks),
        "cpm": _ratio(spend, impressions, 1000),
        "cpa": _ratio(spend, conversions),
        "frequency": _ratio(impressions, reach),
    }


def aggregate(records: Sequence[MetricRecord]) -> AggregateMetrics:
    """Aggregate a cohort into totals plus re-derived ratios.

    ``math.fsum`` is exactly rounded, so the totals do not depend on the
    order of ``records``.
    """
    if not records:
        return AggregateMetrics()

    totals = {
        field: math.fsum(getattr(r, field) for r in records)
        for field in COUNTER_FIELDS
    }
    logger.debug(f"Aggregated {len(records)} records")
    return AggregateMetrics(**totals, **derive_ratios(totals))
