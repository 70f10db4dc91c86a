"""Report rendering infrastructure."""

from taskdesk.infrastructure.reports.pdf_renderer import PdfReportRenderer

__all__ = ["PdfReportRenderer"]
