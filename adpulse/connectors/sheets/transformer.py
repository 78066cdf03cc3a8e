"""AdPulse — Sheet Rows → Typed Records.

Converts flattened sheet rows into the immutable record models. All
coercion and defaulting happens in the models themselves; this module
only decides which model each sheet maps to.
"""

from typing import Any, Dict, List

from adpulse.models.records import AccountRecord, LastRunRecord, MetricRecord
from adpulse.core.logging import get_logger

logger = get_logger("sheets.transformer")


def to_accounts(rows: List[Dict[str, Any]]) -> List[AccountRecord]:
    """Rows of the accounts sheet → AccountRecord list, order preserved."""
    return [AccountRecord.model_validate(row) for row in rows]


def to_metric_records(rows: List[Dict[str, Any]]) -> List[MetricRecord]:
    """Rows of a metrics sheet → MetricRecord list, order preserved.

    Unknown columns are ignored and missing ones default to empty or zero.
    """
    records = [MetricRecord.model_validate(row) for row in rows]
    undated = sum(1 for r in records if not r.date_collected)
    if undated:
        logger.warning(f"{undated} of {len(records)} metric rows have no date_collected")
    return records


def to_last_run(rows: List[Dict[str, Any]]) -> List[LastRunRecord]:
    """Rows of the last-run marker sheet → LastRunRecord list."""
    return [LastRunRecord.model_validate(row) for row in rows]
