"""AdPulse — Typed Sheet Records (Immutable).

Rows arrive from the sheet as loosely-typed dicts. These models are the
parse boundary: every field is coerced and defaulted here so nothing
downstream has to second-guess a cell.
"""

import math
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator


def _safe_float(value: Any) -> float:
    """Lenient number cast: blanks, junk, NaN and infinities become 0."""
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_text(value: Any) -> str:
    """Render a cell as text; integral floats lose their trailing ``.0``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class AccountRecord(BaseModel):
    """One row of the accounts sheet."""

    account_id: str = ""
    account_name: str = ""
    active: bool = False

    model_config = {"frozen": True}

    @field_validator("account_id", "account_name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("active", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        # Only a case-insensitive "TRUE" counts as active
        return _as_text(value).upper() == "TRUE"


COUNTER_FIELDS = ("spend", "impressions", "reach", "clicks", "conversions")
RATIO_FIELDS = ("ctr", "cpc", "cpm", "cpa", "frequency")


class MetricRecord(BaseModel):
    """One account- or campaign-level snapshot row.

    The ratio fields are whatever the sheet reported for this single row.
    Aggregation ignores them and re-derives ratios from summed counters.
    """

    account_id: str = ""
    account_name: str = ""
    campaign_id: str = ""
    campaign_name: str = ""
    date_collected: str = ""

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

    @field_validator(
        "account_id", "account_name", "campaign_id", "campaign_name", mode="before"
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("date_collected", mode="before")
    @classmethod
    def _date(cls, value: Any) -> str:
        if isinstance(value, (date, datetime)):
            return value.strftime("%Y-%m-%d")
        return _as_text(value)

    @field_validator(*COUNTER_FIELDS, *RATIO_FIELDS, mode="before")
    @classmethod
    def _number(cls, value: Any) -> float:
        return _safe_float(value)


class LastRunRecord(BaseModel):
    """One row of the last-run marker sheet."""

    last_run_timestamp: str = ""

    model_config = {"frozen": True}

    @field_validator("last_run_timestamp", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)

    @property
    def timestamp(self) -> Optional[datetime]:
        """Parsed timestamp, or None when the cell is not ISO formatted."""
        if not self.last_run_timestamp:
            return None
        try:
            return datetime.fromisoformat(self.last_run_timestamp)
        except ValueError:
            return None


class DashboardData(BaseModel):
    """Everything one load produces. Rebuilt from scratch on every load."""

    accounts: List[AccountRecord] = []
    account_metrics: List[MetricRecord] = []
    campaign_metrics: List[MetricRecord] = []
    last_run: List[LastRunRecord] = []

    model_config = {"frozen": True}
