"""Report export service."""

from cforce.services.export.report import render_report_pdf, report_filename

__all__ = ["render_report_pdf", "report_filename"]
