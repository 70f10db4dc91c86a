"""PDF report rendering: Jinja2 HTML template converted by WeasyPrint."""

import logging
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from taskdesk.application.dtos.report import ReportTable
from taskdesk.domain.exceptions import ReportRenderingException

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "report.html"


def _get_weasyprint() -> Any:
    """Lazy import WeasyPrint so the API starts without the pdf extra."""
    try:
        from weasyprint import HTML
    except ImportError as e:
        logger.error("WeasyPrint is not installed. Install with: pip install 'taskdesk[pdf]'")
        raise ReportRenderingException(
            "PDF generation requires WeasyPrint. Install it with: pip install 'taskdesk[pdf]'"
        ) from e
    return HTML


class PdfReportRenderer:
    """Implements IReportRenderer."""

    def __init__(self, environment: Environment | None = None) -> None:
        self.environment = environment or Environment(
            loader=PackageLoader("taskdesk.infrastructure.reports", "templates"),
            autoescape=select_autoescape(["html"]),
        )

    def render_html(self, table: ReportTable) -> str:
        return self.environment.get_template(TEMPLATE_NAME).render(table=table)

    def render(self, table: ReportTable) -> bytes:
        HTML = _get_weasyprint()
        html = self.render_html(table)
        try:
            return HTML(string=html).write_pdf()
        except Exception as e:
            logger.exception("PDF rendering failed for %s", table.title)
            raise ReportRenderingException(f"Could not render {table.title}") from e
