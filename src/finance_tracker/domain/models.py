from dataclasses import dataclass
from decimal import Decimal
from datetime import datetime
from finance_tracker.domain.enums import TransactionType

@dataclass(frozen=True)
class Transaction:
    """Core domain model representing a single income or expense entry"""
    id: int
    description: str
    amount: Decimal
    type: TransactionType
    date: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Return amount with sign for net calculations"""
        return self.amount if self.type == TransactionType.INCOME else -self.amount

    def __repr__(self):
        sign = "+" if self.type == TransactionType.INCOME else "-"
        return f"Transaction({self.id}, {self.date:%Y-%m-%d}, {self.description[:30]}, {sign}{self.amount})"
