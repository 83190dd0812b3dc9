import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable, List, Optional

from finance_tracker.domain.enums import TransactionType
from finance_tracker.domain.models import Transaction
from finance_tracker.repositories.base import TransactionRepository

logger = logging.getLogger(__name__)

Listener = Callable[[List[Transaction]], None]

# Amounts are kept to the cent and below 10^13 so they survive a JSON float exactly
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("1e13")

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

def _to_milliseconds(value: datetime) -> datetime:
    """Drop sub-millisecond precision, which storage does not keep"""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)

def parse_amount(value: str | int | float | Decimal | None) -> Optional[Decimal]:
    """
    Parse user input into a non-negative, finite amount.

    Amounts are rounded to the cent. Anything at or above MAX_AMOUNT is
    rejected.

    Returns:
        The amount, or None if the input is not a usable number
    """
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount < 0 or amount >= MAX_AMOUNT:
        return None
    return amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)

def parse_type(value: TransactionType | str | None) -> Optional[TransactionType]:
    """Accept a TransactionType or its string value"""
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        return None

class TransactionStore:
    """
    In-memory owner of the transaction list.

    Every mutation rewrites the full list through the repository and then
    hands the updated list to subscribed listeners.

    Usage:
        store = TransactionStore(repository)
        store.load()
        store.add("Salary", "5000000", TransactionType.INCOME)
    """

    def __init__(
        self,
        repository: TransactionRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository
        self._clock = clock or _utc_now
        self._transactions: List[Transaction] = []
        self._listeners: List[Listener] = []
        self._last_id = 0

    @property
    def transactions(self) -> List[Transaction]:
        """Snapshot of the current list, newest first"""
        return list(self._transactions)

    def load(self) -> List[Transaction]:
        """Replace the in-memory list with the persisted one."""
        self._transactions = self.repository.load()
        self._last_id = max((t.id for t in self._transactions), default=0)
        logger.debug("Store loaded with %d transactions", len(self._transactions))
        return self.transactions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callable that receives the updated list after each mutation.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(
        self,
        description: str,
        amount: str | int | float | Decimal,
        type: TransactionType | str = TransactionType.EXPENSE,
    ) -> Optional[Transaction]:
        """
        Record a new transaction at the head of the list.

        Invalid input (blank description, non-numeric or negative amount,
        unknown type) is dropped without touching state.

        Args:
            description: Free-text label
            amount: Amount as entered, always positive
            type: income or expense

        Returns:
            The new Transaction, or None if the input was rejected

        Raises:
            StorageError: If the updated list could not be persisted
        """
        parsed_amount = parse_amount(amount)
        parsed_type = parse_type(type)

        if not description or not description.strip() or parsed_amount is None or parsed_type is None:
            logger.debug(
                "Rejected transaction input: description=%r amount=%r type=%r",
                description, amount, type,
            )
            return None

        created_at = _to_milliseconds(self._clock())
        transaction = Transaction(
            id=self._next_id(created_at),
            description=description,
            amount=parsed_amount,
            type=parsed_type,
            date=created_at,
        )

        self._transactions = [transaction] + self._transactions
        logger.info("Added %r", transaction)
        self._commit()
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """
        Delete the transaction with the given id.

        Returns:
            True if a transaction was removed, False if the id was unknown

        Raises:
            StorageError: If the updated list could not be persisted
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        removed = len(remaining) != len(self._transactions)

        self._transactions = remaining
        if removed:
            logger.info("Removed transaction %s", transaction_id)
        else:
            logger.debug("No transaction with id %s to remove", transaction_id)

        self._commit()
        return removed

    def _next_id(self, created_at: datetime) -> int:
        """Epoch milliseconds, bumped past every id handed out so far"""
        candidate = max(int(created_at.timestamp() * 1000), self._last_id + 1)
        self._last_id = candidate
        return candidate

    def _commit(self) -> None:
        self.repository.persist(self.transactions)
        for listener in list(self._listeners):
            listener(self.transactions)
