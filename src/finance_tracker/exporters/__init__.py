"""
Exporters for filtered transaction summaries.

Each exporter turns a TransactionSummary into a file. Formats are
registered by name in ExporterFactory, normally from exporters.json.

Quick Start:
    >>> from finance_tracker.exporters import ExporterFactory
    >>>
    >>> ExporterFactory.load_exporters_from_config()
    >>> exporter = ExporterFactory.create_exporter("xlsx")
    >>> exporter.export(summary, "report.xlsx")
"""
from finance_tracker.exporters.base import Exporter, COLUMNS
from finance_tracker.exporters.factory import ExporterFactory

__all__ = [
    "Exporter",
    "ExporterFactory",
    "COLUMNS",
]
