import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, List

from finance_tracker.domain.enums import TransactionType
from finance_tracker.domain.models import Transaction
from finance_tracker.repositories.key_value_transaction_repository import KeyValueTransactionRepository
from finance_tracker.services.transaction_store import TransactionStore
from finance_tracker.storage.key_value import InMemoryKeyValueStore

# Mid-month, mid-year, local time: keeps window boundaries away from the tests
NOW = datetime(2026, 6, 15, 12, 0).astimezone()

@pytest.fixture
def now() -> datetime:
    """Fixed reference time for window filtering"""
    return NOW

@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Build transactions with sensible defaults"""
    counter = iter(range(1, 10_000))

    def _make(
        description: str = "Lunch",
        amount: str = "50000",
        type: TransactionType = TransactionType.EXPENSE,
        date: datetime = NOW,
        id: int | None = None,
    ) -> Transaction:
        return Transaction(
            id=id if id is not None else next(counter),
            description=description,
            amount=Decimal(amount),
            type=type,
            date=date,
        )

    return _make

@pytest.fixture
def sample_transactions(make_transaction) -> List[Transaction]:
    """Salary and lunch on the same day, newest first"""
    return [
        make_transaction("Salary", "5000000", TransactionType.INCOME, NOW, id=2),
        make_transaction("Lunch", "50000", TransactionType.EXPENSE, NOW, id=1),
    ]

@pytest.fixture
def key_value_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()

@pytest.fixture
def repository(key_value_store) -> KeyValueTransactionRepository:
    """Repository backed by an in-memory key-value store"""
    return KeyValueTransactionRepository(key_value_store)

@pytest.fixture
def store(repository) -> TransactionStore:
    """Store with a clock frozen at NOW"""
    return TransactionStore(repository, clock=lambda: NOW)

@pytest.fixture
def ten_days_ago() -> datetime:
    return NOW - timedelta(days=10)
