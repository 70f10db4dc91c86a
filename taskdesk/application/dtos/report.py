"""DTOs for generated reports."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ReportTable:
    """Tabular report content, already formatted for display."""

    title: str
    subtitle_lines: list[str]
    columns: list[str]
    rows: list[list[str]]
    generated_at: datetime


@dataclass(frozen=True)
class RenderedReport:
    """A rendered PDF report and the filename it is served under."""

    filename: str
    content: bytes
    row_count: int
    media_type: str = "application/pdf"
