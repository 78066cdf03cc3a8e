"""AdPulse — Trend Engine.

Compares a current value against the previous snapshot's value and
judges whether the move is good news. Cost metrics have inverse
polarity: going down is favorable.
"""

import math
from typing import Dict

from adpulse.core.metric_registry import ALL_METRICS
from adpulse.models.analysis_models import AggregateMetrics, Delta, DeltaDirection


def _finite(value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def compute_delta(
    current: float, previous: float, inverse_polarity: bool = False
) -> Delta:
    """Relative change of ``current`` against ``previous``.

    - both zero: 0%, flat, favorable
    - previous zero only: +100%, up, favorable unless inverse polarity
    - otherwise: (current - previous) / |previous| * 100, up when >= 0
    """
    current, previous = _finite(current), _finite(previous)

    if previous == 0 and current == 0:
        return Delta(
            relative_change_percent=0.0,
            direction=DeltaDirection.FLAT,
            is_favorable=True,
        )
    if previous == 0:
        return Delta(
            relative_change_percent=100.0,
            direction=DeltaDirection.UP,
            is_favorable=not inverse_polarity,
        )

    change = (current - previous) / abs(previous) * 100
    is_up = change >= 0
    return Delta(
        relative_change_percent=change,
        direction=DeltaDirection.UP if is_up else DeltaDirection.DOWN,
        is_favorable=(not is_up) if inverse_polarity else is_up,
    )


def compare_aggregates(
    current: AggregateMetrics, previous: AggregateMetrics
) -> Dict[str, Delta]:
    """Delta for every registered metric, using each metric's polarity."""
    return {
        name: compute_delta(
            getattr(current, name), getattr(previous, name), metric.inverse_polarity
        )
        for name, metric in ALL_METRICS.items()
    }
