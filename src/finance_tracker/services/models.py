"""
Service layer models - DTOs for service operations.

These models represent the results of service operations, not domain entities.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List
from finance_tracker.domain.enums import TimeWindow
from finance_tracker.domain.models import Transaction
from finance_tracker.utils.format import format_rupiah

@dataclass(frozen=True)
class TransactionSummary:
    """
    The filtered view of the transaction list and its totals.

    Handed read-only to the presentation layer and to exporters.
    """

    window: TimeWindow
    generated_at: datetime
    transactions: List[Transaction] = field(default_factory=list)
    total_income: Decimal = Decimal(0)
    total_expense: Decimal = Decimal(0)

    @property
    def balance(self) -> Decimal:
        """Income minus expense over the filtered set"""
        return self.total_income - self.total_expense

    @property
    def total_transactions(self) -> int:
        return len(self.transactions)

    @property
    def is_empty(self) -> bool:
        return not self.transactions

    def __str__(self) -> str:
        """Human-readable summary"""
        lines = [
            f"📊 Summary - {self.window.value}",
            f"",
            f"Transactions: {self.total_transactions}",
            f"  💰 Income:  {format_rupiah(self.total_income)}",
            f"  💸 Expense: {format_rupiah(self.total_expense)}",
            f"  {'📈' if self.balance >= 0 else '📉'} Balance: {format_rupiah(self.balance)}",
        ]
        return "\n".join(lines)
