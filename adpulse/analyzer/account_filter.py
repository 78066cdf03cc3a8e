"""AdPulse — Account Scoping."""

from typing import List, Sequence, TypeVar

from adpulse.config import settings
from adpulse.models.records import AccountRecord, MetricRecord

RecordT = TypeVar("RecordT", bound=MetricRecord)


def filter_by_account(
    records: Sequence[RecordT],
    account_id: str,
    all_accounts_value: str | None = None,
) -> Sequence[RecordT]:
    """Keep one account's rows, or everything for the "all accounts" sentinel.

    The sentinel returns the input sequence itself, untouched.
    """
    sentinel = all_accounts_value or settings.all_accounts_value
    if account_id == sentinel:
        return records
    return [r for r in records if r.account_id == account_id]


def active_accounts(accounts: Sequence[AccountRecord]) -> List[AccountRecord]:
    """Accounts flagged active, in sheet order."""
    return [a for a in accounts if a.active]


def default_account_id(
    accounts: Sequence[AccountRecord], all_accounts_value: str | None = None
) -> str:
    """First active account, else the "all accounts" sentinel."""
    for account in accounts:
        if account.active:
            return account.account_id
    return all_accounts_value or settings.all_accounts_value
