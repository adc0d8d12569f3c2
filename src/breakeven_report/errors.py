# src/breakeven_report/errors.py
from __future__ import annotations


class ReportError(RuntimeError):
    """Base class for failures while producing a report document."""


class BrowserUnavailableError(ReportError):
    """Chrome could not be launched, or the pool was already closed."""


class RenderTimeoutError(ReportError):
    """The chart surface never appeared in the page within the wait budget."""

    def __init__(self, report: str, selector: str, timeout: float):
        super().__init__(f"{report}: '{selector}' did not appear within {timeout:g}s")
        self.report = report
        self.selector = selector
        self.timeout = timeout


class DocumentAssemblyError(ReportError):
    """Page documents could not be merged into one PDF."""
