import logging
from pathlib import Path
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from finance_tracker.exporters.base import Exporter, COLUMNS
from finance_tracker.services.models import TransactionSummary
from finance_tracker.utils.format import format_date, format_rupiah

logger = logging.getLogger(__name__)

class PdfReportExporter(Exporter):
    """Tabular PDF report: heading, transaction table, then the totals."""

    extension = "pdf"

    TITLE = "Financial Report"
    EMPTY_TEXT = "No transactions in this period."

    def export(self, summary: TransactionSummary, path: Path | str) -> Path:
        path = self.resolve_path(path)
        styles = getSampleStyleSheet()

        elements = [
            Paragraph(self.TITLE, styles["Heading1"]),
            Paragraph(
                f"Period: {summary.window.value} (generated {format_date(summary.generated_at)})",
                styles["Normal"],
            ),
            Spacer(1, 0.2 * inch),
        ]

        if summary.is_empty:
            elements.append(Paragraph(self.EMPTY_TEXT, styles["Normal"]))
        else:
            elements.append(self._transactions_table(summary))

        elements += [Spacer(1, 0.3 * inch), self._totals_table(summary)]

        doc = SimpleDocTemplate(str(path), pagesize=A4, title=self.TITLE)
        doc.build(elements)

        logger.info("Exported %d transactions to %s", summary.total_transactions, path)
        return path

    def _transactions_table(self, summary: TransactionSummary) -> Table:
        data = [COLUMNS]
        for t in summary.transactions:
            data.append([
                format_date(t.date),
                t.description,
                t.type.value,
                format_rupiah(t.amount),
            ])

        table = Table(data, hAlign="LEFT", repeatRows=1)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (3, 0), (3, -1), "RIGHT"),
        ]))
        return table

    def _totals_table(self, summary: TransactionSummary) -> Table:
        data = [
            ["Total Income", format_rupiah(summary.total_income)],
            ["Total Expense", format_rupiah(summary.total_expense)],
            ["Balance", format_rupiah(summary.balance)],
        ]
        table = Table(data, hAlign="LEFT")
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("LINEABOVE", (0, 2), (-1, 2), 0.5, colors.black),
        ]))
        return table
