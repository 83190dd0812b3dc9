import logging
from pathlib import Path
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from finance_tracker.exporters.base import Exporter
from finance_tracker.services.models import TransactionSummary

logger = logging.getLogger(__name__)

class ChartExporter(Exporter):
    """Bar chart of income, expense and balance as a PNG image."""

    extension = "png"

    LABELS = ["Income", "Expense", "Balance"]
    COLORS = ["#38a169", "#e53e3e", "#3182ce"]

    def export(self, summary: TransactionSummary, path: Path | str) -> Path:
        path = self.resolve_path(path)
        values = [
            float(summary.total_income),
            float(summary.total_expense),
            float(summary.balance),
        ]

        fig, ax = plt.subplots(figsize=(6, 4))
        try:
            bars = ax.bar(self.LABELS, values, color=self.COLORS)
            ax.bar_label(bars, labels=[f"{v:,.0f}" for v in values], padding=3)
            ax.axhline(0, color="black", linewidth=0.8)
            ax.set_title(f"Cashflow ({summary.window.value})")
            ax.set_ylabel("Amount (Rp)")
            fig.tight_layout()
            fig.savefig(path, format="png")
        finally:
            plt.close(fig)

        logger.info("Rendered chart for %d transactions to %s", summary.total_transactions, path)
        return path
