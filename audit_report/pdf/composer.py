# audit_report/pdf/composer.py
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from audit_report.config import Config
from audit_report.models import CaseRecord
from audit_report.utils import report_filename

from .canvas import DocumentCanvas
from .errors import ReportGenerationError
from .font_manager import FontManager
from .footer import FooterStamper
from .geometry import PageGeometry
from .layout import ReportLayout
from .theme import Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedReport:
    content: bytes
    filename: str
    page_count: int

    @property
    def size(self) -> int:
        return len(self.content)


class ReportComposer:
    """
    Builds one complete audit report: layout of every section, page-number
    pass, then serialization. Each generate() call works on its own canvas,
    so a composer can be shared between threads.
    """
    def __init__(self, config=None, theme: Optional[Theme] = None, geometry: Optional[PageGeometry] = None,
                 measurer=None):
        config = config or Config
        self.config = config
        if theme is None:
            fm = FontManager(config=config)
            theme = Theme.from_config(config, fm.FONT_REGULAR, fm.FONT_BOLD, fm.FONT_ITALIC)
        self.theme = theme
        self.geometry = geometry or PageGeometry.from_config(config)
        self.measurer = measurer
        self.filename_suffix = getattr(config, 'FILENAME_SUFFIX', Config.FILENAME_SUFFIX)
        self.report_title = getattr(config, 'REPORT_TITLE', Config.REPORT_TITLE)
        self.subtasks_title = getattr(config, 'SUBTASKS_TITLE', Config.SUBTASKS_TITLE)
        self.default_issue_type = getattr(config, 'DEFAULT_ISSUE_TYPE', Config.DEFAULT_ISSUE_TYPE)

    def new_canvas(self) -> DocumentCanvas:
        return DocumentCanvas(self.geometry, measurer=self.measurer)

    def render(self, parent: CaseRecord, subtasks: Sequence[CaseRecord] = ()) -> DocumentCanvas:
        """Lay out and stamp every page; returns the finished canvas without serializing it."""
        canvas = self.new_canvas()
        cursor = canvas.cursor()
        layout = ReportLayout(canvas, self.theme, report_title=self.report_title,
                              subtasks_title=self.subtasks_title, default_issue_type=self.default_issue_type)
        layout.layout_report(cursor, parent, list(subtasks or []))
        FooterStamper(canvas, self.theme).stamp()
        return canvas

    def generate(self, parent: CaseRecord, subtasks: Sequence[CaseRecord] = ()) -> GeneratedReport:
        subtasks = list(subtasks or [])
        logger.info("Generating audit report for %s (%d subtasks)", parent.key, len(subtasks))
        try:
            canvas = self.render(parent, subtasks)
            content = canvas.to_bytes(title=f"{parent.key} - {self.report_title}")
        except Exception as e:
            logger.exception("Audit report generation failed for %s", parent.key)
            raise ReportGenerationError(str(e)) from e

        report = GeneratedReport(
            content=content,
            filename=report_filename(parent.key, self.filename_suffix),
            page_count=canvas.page_count,
        )
        logger.info("Audit report %s: %d pages, %d bytes", report.filename, report.page_count, report.size)
        return report
