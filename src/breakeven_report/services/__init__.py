"""Service layer: orchestration of report pages."""

from .report_service import generate_combined_report, report_pages

__all__ = [
    "generate_combined_report",
    "report_pages",
]
