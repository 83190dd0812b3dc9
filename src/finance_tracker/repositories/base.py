from abc import ABC, abstractmethod
from typing import List

from finance_tracker.domain.models import Transaction

class TransactionRepository(ABC):
    """
    Abstract repository for transaction persistence.

    The whole list is the unit of persistence: it is loaded once at
    startup and rewritten as a full snapshot after every mutation.
    """

    @abstractmethod
    def load(self) -> List[Transaction]:
        """
        Load the persisted transaction list.

        An absent or unreadable snapshot is a valid initial state, so
        this never raises for bad stored data.

        Returns:
            Transactions in stored order (newest first), or an empty list
        """
        pass

    @abstractmethod
    def persist(self, transactions: List[Transaction]) -> None:
        """
        Overwrite the stored snapshot with the given list.

        Args:
            transactions: The full list to store

        Raises:
            StorageError: If the snapshot could not be written
        """
        pass
