from abc import ABC, abstractmethod
from pathlib import Path
from typing import List
from finance_tracker.services.models import TransactionSummary

COLUMNS: List[str] = ["Date", "Description", "Type", "Amount"]

class Exporter(ABC):
    """
    Abstract base class for all summary exporters.

    Each output format gets its own concrete exporter. Exporters only
    read the summary they are handed; nothing flows back to the store.
    """

    extension: str = ""

    @abstractmethod
    def export(self, summary: TransactionSummary, path: Path | str) -> Path:
        """
        Write the summary to a file.

        Args:
            summary: Filtered transactions and their totals
            path: Destination file. The exporter's extension is appended
                when the path has no suffix.

        Returns:
            The path that was written
        """
        pass

    def resolve_path(self, path: Path | str) -> Path:
        """Add the default extension if missing and create parent folders"""
        path = Path(path)
        if not path.suffix and self.extension:
            path = path.with_suffix(f".{self.extension}")
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
