"""Tests for account scoping."""

from adpulse.analyzer.account_filter import (
    active_accounts,
    default_account_id,
    filter_by_account,
)
from adpulse.models.records import AccountRecord


def test_all_sentinel_returns_input_unchanged(account_metrics):
    result = filter_by_account(account_metrics, "all")
    assert result is account_metrics
    assert len(result) == len(account_metrics)


def test_specific_account_keeps_relative_order(account_metrics):
    result = filter_by_account(account_metrics, "a2")
    assert [r.account_id for r in result] == ["a2", "a2", "a2"]
    assert [r.date_collected for r in result] == ["2024-01-01", "2024-01-08", "2024-01-15"]


def test_unknown_account_is_empty(account_metrics):
    assert filter_by_account(account_metrics, "nope") == []


def test_custom_sentinel(account_metrics):
    assert filter_by_account(account_metrics, "*", all_accounts_value="*") is account_metrics


def test_active_accounts_in_sheet_order(accounts):
    assert [a.account_id for a in active_accounts(accounts)] == ["a1", "a2"]


def test_default_account_is_first_active(accounts):
    assert default_account_id(accounts) == "a1"


def test_default_account_without_active_is_all():
    dormant = [AccountRecord(account_id="x", active="FALSE")]
    assert default_account_id(dormant) == "all"
    assert default_account_id([]) == "all"
