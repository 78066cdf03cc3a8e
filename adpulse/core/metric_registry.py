"""AdPulse — Dashboard Metric Registry.

Defines the metrics shown on the dashboard, their classification and
their polarity. Delta consumers look polarity up here instead of
hard-coding which metrics are "lower is better".
"""

from enum import Enum
from typing import Dict


class MetricType(str, Enum):
    """How a metric is categorised."""

    VOLUME = "volume"  # Raw counts: impressions, clicks, reach
    COST = "cost"  # Monetary totals: spend
    CONVERSION = "conversion"  # Outcome counts: conversions
    DERIVED = "derived"  # Ratios re-derived from summed counters


class MetricDefinition:
    """Describes a single metric."""

    def __init__(
        self,
        name: str,
        metric_type: MetricType,
        unit: str = "",
        label: str = "",
        inverse_polarity: bool = False,
    ):
        self.name = name
        self.metric_type = metric_type
        self.unit = unit
        self.label = label or name
        self.inverse_polarity = inverse_polarity

    def __repr__(self) -> str:
        return f"<Metric {self.name} ({self.metric_type.value})>"


# ─────────────────────────────────────────────
# RAW COUNTERS — summed across a cohort
# ─────────────────────────────────────────────

RAW_COUNTERS: Dict[str, MetricDefinition] = {
    "spend": MetricDefinition("spend", MetricType.COST, "currency", "Spend"),
    "impressions": MetricDefinition(
        "impressions", MetricType.VOLUME, "count", "Impressions"
    ),
    "reach": MetricDefinition("reach", MetricType.VOLUME, "count", "Reach"),
    "clicks": MetricDefinition("clicks", MetricType.VOLUME, "count", "Clicks"),
    "conversions": MetricDefinition(
        "conversions", MetricType.CONVERSION, "count", "Conversions"
    ),
}


# ─────────────────────────────────────────────
# DERIVED METRICS — recomputed from the sums
# ─────────────────────────────────────────────

DERIVED_METRICS: Dict[str, MetricDefinition] = {
    "ctr": MetricDefinition("ctr", MetricType.DERIVED, "%", "CTR"),
    "cpc": MetricDefinition(
        "cpc", MetricType.DERIVED, "currency", "CPC", inverse_polarity=True
    ),
    "cpm": MetricDefinition(
        "cpm", MetricType.DERIVED, "currency", "CPM", inverse_polarity=True
    ),
    "cpa": MetricDefinition(
        "cpa", MetricType.DERIVED, "currency", "CPA", inverse_polarity=True
    ),
    "frequency": MetricDefinition("frequency", MetricType.DERIVED, "avg", "Frequency"),
}


# ─────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────

ALL_METRICS = {**RAW_COUNTERS, **DERIVED_METRICS}

# KPI cards, in display order
KPI_METRICS = [
    "spend",
    "impressions",
    "clicks",
    "ctr",
    "cpc",
    "cpm",
    "conversions",
    "cpa",
]


def get_metric(name: str) -> MetricDefinition | None:
    """Look up a metric by name."""
    return ALL_METRICS.get(name)


def is_inverse(name: str) -> bool:
    """True when a decrease of this metric is the favorable direction."""
    metric = get_metric(name)
    return metric.inverse_polarity if metric else False


def metrics_by_type(metric_type: MetricType) -> list[MetricDefinition]:
    """Return all metrics of a given type."""
    return [m for m in ALL_METRICS.values() if m.metric_type == metric_type]
