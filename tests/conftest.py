"""Shared fixtures."""

import pytest

from adpulse.config import Settings
from adpulse.models.records import (
    AccountRecord,
    DashboardData,
    LastRunRecord,
    MetricRecord,
)
from tests.sheet_fixtures import make_metric


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        spreadsheet_id="sheet-123",
        sheets_base_url="https://sheets.test/d",
        retry_base_delay=0,
        max_retries=3,
    )


@pytest.fixture
def accounts() -> list[AccountRecord]:
    return [
        AccountRecord(account_id="inactive", account_name="Dormant", active="FALSE"),
        AccountRecord(account_id="a1", account_name="Alpha", active="TRUE"),
        AccountRecord(account_id="a2", account_name="Beta", active="true"),
    ]


@pytest.fixture
def account_metrics() -> list[MetricRecord]:
    return [
        make_metric("a1", "2024-01-01", spend=50, impressions=5000, reach=2500, clicks=50, conversions=5),
        make_metric("a2", "2024-01-01", spend=20, impressions=2000, reach=1000, clicks=10, conversions=0),
        make_metric("a1", "2024-01-08", spend=100, impressions=10000, reach=5000, clicks=100, conversions=10),
        make_metric("a2", "2024-01-08", spend=40, impressions=4000, reach=2000, clicks=40, conversions=4),
        make_metric("a1", "2024-01-15", spend=150, impressions=12000, reach=6000, clicks=120, conversions=10),
        make_metric("a2", "2024-01-15", spend=30, impressions=3000, reach=1500, clicks=60, conversions=2),
    ]


@pytest.fixture
def campaign_metrics() -> list[MetricRecord]:
    def campaign(account_id, cid, name, date, spend, conversions=0):
        return MetricRecord(
            account_id=account_id,
            account_name=f"Account {account_id}",
            campaign_id=cid,
            campaign_name=name,
            date_collected=date,
            spend=spend,
            impressions=spend * 100,
            clicks=spend,
            conversions=conversions,
        )

    return [
        campaign("a1", "c1", "Search Brand", "2024-01-08", 80),
        campaign("a1", "c1", "Search Brand", "2024-01-15", 90, 5),
        campaign("a1", "c2", "awareness video", "2024-01-15", 60, 5),
        campaign("a2", "c3", "Retargeting", "2024-01-15", 30, 2),
    ]


@pytest.fixture
def dashboard_data(accounts, account_metrics, campaign_metrics) -> DashboardData:
    return DashboardData(
        accounts=accounts,
        account_metrics=account_metrics,
        campaign_metrics=campaign_metrics,
        last_run=[
            LastRunRecord(last_run_timestamp="2024-01-14T09:00:00"),
            LastRunRecord(last_run_timestamp="2024-01-15T09:30:00"),
        ],
    )
