import json
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from finance_tracker.domain.models import Transaction
from finance_tracker.domain.enums import TransactionType
from finance_tracker.repositories.base import TransactionRepository
from finance_tracker.storage.key_value import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "keuangan-data"

class KeyValueTransactionRepository(TransactionRepository):
    """
    Stores the transaction list as one JSON array under a single key.

    Record layout:
        {"id": int, "description": str, "amount": number,
         "type": "income" | "expense", "date": ISO-8601 string}
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[Transaction]:
        """Load the list, falling back to empty on absent or malformed data."""
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.warning("Could not read stored transactions, starting empty: %s", e)
            return []

        if raw is None:
            return []

        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning("Stored transactions under '%s' are not valid JSON, starting empty: %s", self.key, e)
            return []

        if not isinstance(records, list):
            logger.warning("Stored value under '%s' is not a list, starting empty", self.key)
            return []

        transactions = []
        for record in records:
            try:
                transactions.append(self._record_to_transaction(record))
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                logger.warning("Skipping malformed stored transaction %r: %s", record, e)
                continue

        logger.debug("Loaded %d transactions from '%s'", len(transactions), self.key)
        return transactions

    def persist(self, transactions: List[Transaction]) -> None:
        """Serialize the full list and overwrite the stored value."""
        payload = json.dumps(
            [self._transaction_to_record(t) for t in transactions],
            ensure_ascii=False,
        )
        self.store.set(self.key, payload)
        logger.debug("Persisted %d transactions to '%s'", len(transactions), self.key)

    def _transaction_to_record(self, transaction: Transaction) -> Dict[str, Any]:
        """Convert a Transaction to its stored JSON record."""
        return {
            "id": transaction.id,
            "description": transaction.description,
            "amount": _amount_to_json(transaction.amount),
            "type": transaction.type.value,
            "date": format_timestamp(transaction.date),
        }

    def _record_to_transaction(self, record: Dict[str, Any]) -> Transaction:
        """Convert a stored JSON record to a Transaction object."""
        if not isinstance(record, dict):
            raise TypeError(f"expected an object, got {type(record).__name__}")

        amount = Decimal(str(record["amount"]))
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"invalid amount {record['amount']!r}")

        description = record["description"]
        if not isinstance(description, str) or not description:
            raise ValueError("description must be a non-empty string")

        return Transaction(
            id=int(record["id"]),
            description=description,
            amount=amount,
            type=TransactionType(record["type"]),
            date=parse_timestamp(record["date"]),
        )

def _amount_to_json(amount: Decimal) -> int | float:
    """JSON numbers: integral amounts stay integers"""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)

def format_timestamp(value: datetime) -> str:
    """
    Render a timestamp as UTC ISO-8601 with milliseconds and a 'Z' suffix.

    Naive datetimes are taken to be local time.
    """
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC if no offset)."""
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
