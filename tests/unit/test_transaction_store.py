import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from finance_tracker.domain.enums import TransactionType
from finance_tracker.domain.models import Transaction
from finance_tracker.repositories.base import TransactionRepository
from finance_tracker.services.transaction_store import TransactionStore, parse_amount, parse_type
from finance_tracker.storage.key_value import StorageError

@pytest.fixture
def mock_repository(mocker) -> TransactionRepository:
    """Create a mock repository"""
    repository = mocker.Mock()
    repository.load.return_value = []
    return repository

@pytest.fixture
def mock_store(mock_repository, now) -> TransactionStore:
    """Store over a mocked repository"""
    return TransactionStore(mock_repository, clock=lambda: now)

@pytest.mark.unit
class TestTransactionStoreAdd:

    def test_add_prepends_new_transaction(self, store: TransactionStore, now):
        # Arrange
        first = store.add("Salary", "5000000", TransactionType.INCOME)

        # Act
        second = store.add("Lunch", "50000", TransactionType.EXPENSE)

        # Assert
        assert store.transactions == [second, first]
        assert second.description == "Lunch"
        assert second.amount == Decimal("50000")
        assert second.type == TransactionType.EXPENSE
        assert second.date == now

    def test_add_grows_list_by_one_and_persists(self, store: TransactionStore, repository):
        store.add("Salary", "5000000", TransactionType.INCOME)
        before = len(store.transactions)

        added = store.add("Bus ticket", "3500", "expense")

        reloaded = repository.load()
        assert len(reloaded) == before + 1
        assert reloaded[0] == added

    def test_add_returns_transaction_with_timestamp_id(self, store: TransactionStore, now):
        added = store.add("Coffee", "25000")

        assert added.id == int(now.timestamp() * 1000)

    def test_ids_stay_unique_within_the_same_millisecond(self, store: TransactionStore):
        ids = [store.add(f"Item {i}", "1000").id for i in range(5)]

        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_removed_id_is_not_reused(self, store: TransactionStore):
        first = store.add("Coffee", "25000")
        store.remove(first.id)

        second = store.add("Tea", "15000")

        assert second.id > first.id

    def test_ids_continue_past_loaded_transactions(self, repository, now):
        # Arrange
        future_id = int(now.timestamp() * 1000) + 10_000
        stored = [Transaction(
            id=future_id,
            description="Imported",
            amount=Decimal("1"),
            type=TransactionType.INCOME,
            date=now,
        )]
        repository.persist(stored)
        store = TransactionStore(repository, clock=lambda: now)
        store.load()

        # Act
        added = store.add("Next", "1")

        # Assert
        assert added.id == future_id + 1

    def test_reload_matches_entry_made_with_sub_millisecond_clock(self, repository):
        # Arrange
        clock = lambda: datetime(2026, 6, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)
        store = TransactionStore(repository, clock=clock)

        # Act
        added = store.add("Lunch", "50000")

        # Assert
        assert added.date == datetime(2026, 6, 15, 12, 0, 0, 123000, tzinfo=timezone.utc)
        assert repository.load() == store.transactions

    def test_reload_matches_high_precision_amount(self, store: TransactionStore, repository):
        added = store.add("Interest", "0.123456789012345678901", TransactionType.INCOME)

        assert added.amount == Decimal("0.12")
        assert repository.load() == store.transactions

    def test_largest_accepted_amount_survives_reload(self, store: TransactionStore, repository):
        added = store.add("House", "9999999999999.99")

        assert added is not None
        assert repository.load() == store.transactions

    def test_default_type_is_expense(self, store: TransactionStore):
        added = store.add("Snack", "10000")

        assert added.type == TransactionType.EXPENSE

    @pytest.mark.parametrize("amount", [100, 99.5, Decimal("12.75"), " 42 ", "0"])
    def test_add_accepts_numeric_inputs(self, store: TransactionStore, amount):
        added = store.add("Misc", amount)

        assert added is not None
        assert added.amount == Decimal(str(amount).strip())

    def test_empty_description_is_rejected(self, mock_store: TransactionStore, mock_repository):
        result = mock_store.add("", "100", TransactionType.EXPENSE)

        assert result is None
        assert mock_store.transactions == []
        mock_repository.persist.assert_not_called()

    @pytest.mark.parametrize(
        "description, amount, type",
        [
            ("   ", "100", "expense"),
            ("Lunch", "", "expense"),
            ("Lunch", "abc", "expense"),
            ("Lunch", "-5", "expense"),
            ("Lunch", "NaN", "expense"),
            ("Lunch", "Infinity", "expense"),
            ("Lunch", None, "expense"),
            ("Lunch", "100", "transfer"),
            ("Lunch", "1e5000", "expense"),
            ("Lunch", "1e999999999", "expense"),
            ("Lunch", "10000000000000", "expense"),
        ],
    )
    def test_invalid_input_is_a_silent_no_op(self, mock_store, mock_repository, description, amount, type):
        result = mock_store.add(description, amount, type)

        assert result is None
        assert mock_store.transactions == []
        mock_repository.persist.assert_not_called()

@pytest.mark.unit
class TestTransactionStoreRemove:

    def test_remove_present_id(self, store: TransactionStore, repository):
        # Arrange
        keep = store.add("Salary", "5000000", TransactionType.INCOME)
        drop = store.add("Lunch", "50000")

        # Act
        removed = store.remove(drop.id)

        # Assert
        assert removed is True
        assert store.transactions == [keep]
        assert all(t.id != drop.id for t in repository.load())

    def test_remove_absent_id_leaves_list_unchanged(self, store: TransactionStore):
        store.add("Salary", "5000000", TransactionType.INCOME)
        before = store.transactions

        removed = store.remove(123)

        assert removed is False
        assert store.transactions == before

    def test_remove_persists_resulting_list(self, mock_store: TransactionStore, mock_repository):
        added = mock_store.add("Lunch", "50000")
        mock_repository.persist.reset_mock()

        mock_store.remove(added.id)

        mock_repository.persist.assert_called_once_with([])

@pytest.mark.unit
class TestTransactionStoreLifecycle:

    def test_load_reads_repository(self, mock_store, mock_repository, sample_transactions):
        mock_repository.load.return_value = sample_transactions

        result = mock_store.load()

        assert result == sample_transactions
        assert mock_store.transactions == sample_transactions

    def test_load_on_empty_storage(self, store: TransactionStore):
        assert store.load() == []

    def test_transactions_property_is_a_copy(self, store: TransactionStore):
        store.add("Lunch", "50000")

        snapshot = store.transactions
        snapshot.clear()

        assert len(store.transactions) == 1

    def test_listeners_receive_updated_list(self, store: TransactionStore, mocker):
        # Arrange
        listener = mocker.Mock()
        store.subscribe(listener)

        # Act
        added = store.add("Lunch", "50000")
        store.remove(added.id)

        # Assert
        assert listener.call_args_list == [mocker.call([added]), mocker.call([])]

    def test_listener_not_called_for_rejected_input(self, store: TransactionStore, mocker):
        listener = mocker.Mock()
        store.subscribe(listener)

        store.add("", "100")

        listener.assert_not_called()

    def test_unsubscribe_stops_notifications(self, store: TransactionStore, mocker):
        listener = mocker.Mock()
        unsubscribe = store.subscribe(listener)

        unsubscribe()
        store.add("Lunch", "50000")

        listener.assert_not_called()

    def test_storage_error_propagates(self, mock_store, mock_repository):
        mock_repository.persist.side_effect = StorageError("disk full")

        with pytest.raises(StorageError, match="disk full"):
            mock_store.add("Lunch", "50000")

    def test_default_clock_is_utc(self, repository):
        store = TransactionStore(repository)

        added = store.add("Lunch", "50000")

        assert added.date.tzinfo is not None
        assert added.date.utcoffset() == timedelta(0)
        assert abs(datetime.now(timezone.utc) - added.date) < timedelta(minutes=1)

@pytest.mark.unit
class TestInputParsing:

    def test_parse_amount_valid(self):
        assert parse_amount("1500.50") == Decimal("1500.50")

    def test_parse_amount_rounds_to_the_cent(self):
        assert parse_amount("10.005") == Decimal("10.01")
        assert parse_amount("1e5") == Decimal("100000.00")

    @pytest.mark.parametrize("value", ["", "  ", "1,000", "ten", "-1", "nan", "1e5000", "1e13", None, True])
    def test_parse_amount_invalid(self, value):
        assert parse_amount(value) is None

    def test_parse_type(self):
        assert parse_type("INCOME") is TransactionType.INCOME
        assert parse_type(TransactionType.EXPENSE) is TransactionType.EXPENSE
        assert parse_type("other") is None
