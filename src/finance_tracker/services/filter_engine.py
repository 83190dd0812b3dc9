"""
Filter & aggregation over the transaction list.

All window predicates are evaluated in local time against a single
"now", so one summary never straddles two clock readings.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from finance_tracker.domain.enums import TimeWindow, TransactionType
from finance_tracker.domain.models import Transaction
from finance_tracker.services.models import TransactionSummary

logger = logging.getLogger(__name__)

WEEKLY_SPAN = timedelta(days=7)

def resolve_window(window: TimeWindow | str | None) -> TimeWindow:
    """
    Turn a selector into a TimeWindow.

    Unknown selectors resolve to ALL: filtering fails open rather than
    hiding data.
    """
    if isinstance(window, TimeWindow):
        return window
    try:
        return TimeWindow(str(window).strip().lower())
    except ValueError:
        logger.debug("Unknown window selector %r, showing all transactions", window)
        return TimeWindow.ALL

def _local(value: datetime) -> datetime:
    # naive datetimes are taken as local time
    return value.astimezone()

def _same_day(date: datetime, now: datetime) -> bool:
    return date.date() == now.date()

def _within_week(date: datetime, now: datetime) -> bool:
    """
    Seven calendar days back at the same wall-clock time, inclusive, with
    no upper bound. Compared on local wall time so a DST change inside the
    week does not shift the cutoff by an hour.
    """
    return date.replace(tzinfo=None) >= now.replace(tzinfo=None) - WEEKLY_SPAN

def _same_month(date: datetime, now: datetime) -> bool:
    return date.month == now.month and date.year == now.year

def _same_year(date: datetime, now: datetime) -> bool:
    return date.year == now.year

_PREDICATES: Dict[TimeWindow, Callable[[datetime, datetime], bool]] = {
    TimeWindow.DAILY: _same_day,
    TimeWindow.WEEKLY: _within_week,
    TimeWindow.MONTHLY: _same_month,
    TimeWindow.YEARLY: _same_year,
}

def filter_transactions(
    transactions: Iterable[Transaction],
    window: TimeWindow | str = TimeWindow.ALL,
    now: Optional[datetime] = None,
) -> List[Transaction]:
    """
    Return the transactions that fall inside a time window.

    Args:
        transactions: Transactions in display order
        window: Window selector; unknown values behave like 'all'
        now: Reference time, defaults to the current local time

    Returns:
        The matching transactions, in their original relative order

    Example:
        ### This week's entries
        recent = filter_transactions(store.transactions, "weekly")
    """
    predicate = _PREDICATES.get(resolve_window(window))
    if predicate is None:
        return list(transactions)

    reference = _local(now or datetime.now())
    return [t for t in transactions if predicate(_local(t.date), reference)]

def total_for_type(transactions: Iterable[Transaction], transaction_type: TransactionType) -> Decimal:
    """Sum the amounts of one transaction type"""
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        Decimal(0),
    )

def summarize(
    transactions: Iterable[Transaction],
    window: TimeWindow | str = TimeWindow.ALL,
    now: Optional[datetime] = None,
) -> TransactionSummary:
    """Filter the list to a window and total it up."""
    resolved = resolve_window(window)
    reference = _local(now or datetime.now())
    filtered = filter_transactions(transactions, resolved, reference)

    return TransactionSummary(
        window=resolved,
        generated_at=reference,
        transactions=filtered,
        total_income=total_for_type(filtered, TransactionType.INCOME),
        total_expense=total_for_type(filtered, TransactionType.EXPENSE),
    )
