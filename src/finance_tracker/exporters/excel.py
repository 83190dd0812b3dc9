import logging
from pathlib import Path
import pandas as pd
from finance_tracker.exporters.base import Exporter, COLUMNS
from finance_tracker.services.models import TransactionSummary
from finance_tracker.utils.format import format_date

logger = logging.getLogger(__name__)

class ExcelExporter(Exporter):
    """
    Spreadsheet export of a summary.

    Writes two sheets:
    - Transactions: one row per transaction (Date, Description, Type, Amount)
    - Summary: income, expense and balance totals
    """

    extension = "xlsx"

    TRANSACTIONS_SHEET = "Transactions"
    SUMMARY_SHEET = "Summary"

    def export(self, summary: TransactionSummary, path: Path | str) -> Path:
        path = self.resolve_path(path)

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            self._transactions_frame(summary).to_excel(
                writer, sheet_name=self.TRANSACTIONS_SHEET, index=False
            )
            self._summary_frame(summary).to_excel(
                writer, sheet_name=self.SUMMARY_SHEET, index=False
            )

        logger.info("Exported %d transactions to %s", summary.total_transactions, path)
        return path

    def _transactions_frame(self, summary: TransactionSummary) -> pd.DataFrame:
        rows = [
            {
                "Date": format_date(t.date),
                "Description": t.description,
                "Type": t.type.value,
                "Amount": float(t.amount),
            }
            for t in summary.transactions
        ]
        return pd.DataFrame(rows, columns=COLUMNS)

    def _summary_frame(self, summary: TransactionSummary) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "Metric": ["Window", "Income", "Expense", "Balance"],
                "Value": [
                    summary.window.value,
                    float(summary.total_income),
                    float(summary.total_expense),
                    float(summary.balance),
                ],
            }
        )
