import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from finance_tracker.domain.enums import TimeWindow, TransactionType
from finance_tracker.domain.models import Transaction
from finance_tracker.exporters.factory import ExporterFactory
from finance_tracker.services.filter_engine import filter_transactions, resolve_window, summarize
from finance_tracker.services.models import TransactionSummary
from finance_tracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

class TransactionService:
    """
    What the presentation layer talks to.

    Accepts the three commands (add, remove, set_filter) and answers
    queries with the filtered view of the store.
    """

    def __init__(
        self,
        store: TransactionStore,
        window: TimeWindow | str = TimeWindow.ALL,
    ):
        self.store = store
        self.window = resolve_window(window)

    def add(
        self,
        description: str,
        amount: str | int | float | Decimal,
        transaction_type: TransactionType | str = TransactionType.EXPENSE,
    ) -> Optional[Transaction]:
        """
        Record a transaction.

        Returns:
            The new transaction, or None if the input was rejected
        """
        return self.store.add(description, amount, transaction_type)

    def remove(self, transaction_id: int) -> bool:
        """Delete by id. Returns False if the id was unknown."""
        return self.store.remove(transaction_id)

    def set_filter(self, window: TimeWindow | str) -> TimeWindow:
        """
        Change the active time window.

        Unknown selectors fall back to showing everything.

        Returns:
            The window now in effect
        """
        self.window = resolve_window(window)
        logger.debug("Active window set to '%s'", self.window.value)
        return self.window

    def get_transactions(self, now: Optional[datetime] = None) -> List[Transaction]:
        """Transactions visible under the active window, newest first"""
        return filter_transactions(self.store.transactions, self.window, now)

    def get_summary(self, now: Optional[datetime] = None) -> TransactionSummary:
        """Filtered transactions plus income, expense and balance totals"""
        return summarize(self.store.transactions, self.window, now)

    def export(
        self,
        fmt: str,
        path: Path | str,
        now: Optional[datetime] = None,
    ) -> Path:
        """
        Export the current filtered view.

        Args:
            fmt: Registered format name (e.g., 'xlsx', 'pdf', 'png')
            path: Destination file
            now: Reference time for the window, defaults to now

        Returns:
            The path that was written

        Raises:
            ValueError: If no exporter is registered for the format
        """
        exporter = ExporterFactory.create_exporter(fmt)
        summary = self.get_summary(now)
        return exporter.export(summary, path)
