"""AdPulse — Snapshot Selection.

Records carry ISO ``date_collected`` strings, which sort chronologically
as plain strings. A snapshot (cohort) is every record sharing one date.
"""

from typing import List, Optional, Sequence, TypeVar

from adpulse.models.records import MetricRecord

RecordT = TypeVar("RecordT", bound=MetricRecord)


def collection_dates(records: Sequence[MetricRecord]) -> List[str]:
    """Distinct collection dates, ascending."""
    return sorted({r.date_collected for r in records})


def latest_date(records: Sequence[MetricRecord]) -> Optional[str]:
    dates = collection_dates(records)
    return dates[-1] if dates else None


def previous_date(records: Sequence[MetricRecord]) -> Optional[str]:
    dates = collection_dates(records)
    return dates[-2] if len(dates) >= 2 else None


def select_on_date(records: Sequence[RecordT], date: Optional[str]) -> List[RecordT]:
    """The cohort for one date; empty when there is no such date."""
    if date is None:
        return []
    return [r for r in records if r.date_collected == date]


def select_latest(records: Sequence[RecordT]) -> List[RecordT]:
    """All records from the most recent collection date."""
    return select_on_date(records, latest_date(records))


def select_previous(records: Sequence[RecordT]) -> List[RecordT]:
    """All records from the second most recent date; empty with fewer than two dates."""
    return select_on_date(records, previous_date(records))
