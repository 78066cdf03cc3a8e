"""AdPulse — Central Configuration via Pydantic Settings."""

from typing import Literal
from urllib.parse import quote

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Spreadsheet source ──
    spreadsheet_id: str = ""
    sheets_base_url: str = "https://docs.google.com/spreadsheets/d"
    accounts_sheet: str = "Accounts"
    account_metrics_sheet: str = "Account Metrics"
    campaign_metrics_sheet: str = "Campaign Metrics"
    last_run_sheet: str = "Last Run"

    # ── Transport ──
    http_timeout: float = 30.0
    max_retries: int = 3
    retry_base_delay: float = 2.0  # seconds, doubled per attempt

    # ── App ──
    log_level: str = "INFO"

    # ── Dashboard ──
    all_accounts_value: str = "all"
    top_campaigns_limit: int = 10
    snapshot_scope: Literal["filtered", "global"] = "filtered"

    def sheet_url(self, sheet_name: str) -> str:
        """Return the gviz JSON query URL for one sheet tab."""
        return (
            f"{self.sheets_base_url}/{self.spreadsheet_id}/gviz/tq"
            f"?tqx=out:json&sheet={quote(sheet_name)}"
        )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
