# audit_report/pdf/layout.py
import logging
from typing import Sequence

from audit_report.config import Config
from audit_report.models import CaseRecord
from audit_report.utils import format_date

from .geometry import LayoutCursor
from .tables import ColumnSpec, RenderedTable, TableRenderer
from .theme import TextStyle, Theme
from .truncation import TextTruncator

logger = logging.getLogger(__name__)

# vertical room each block asks for before it is drawn
SECTION_TITLE_SPACE = 28
SUBSECTION_TITLE_SPACE = 24
TABLE_SPACE = 28
SUBTASK_BLOCK_SPACE = 120
SUBTASK_BANNER_SPACE = 36
META_LINE_SPACE = 20

# divider rules
TOP_TOLERANCE = 2
MIN_ROOM_BELOW_DIVIDER = 24

BANNER_HEIGHT = 24
BANNER_ADVANCE = 26
BANNER_PAD_X = 8
BANNER_PAD_Y = 6


class ReportLayout:
    """
    Draws the sections of an audit report in order. All vertical position
    lives in the LayoutCursor handed to each call.
    """
    def __init__(self, canvas, theme: Theme, report_title: str = Config.REPORT_TITLE,
                 subtasks_title: str = Config.SUBTASKS_TITLE, default_issue_type: str = Config.DEFAULT_ISSUE_TYPE):
        self.canvas = canvas
        self.theme = theme
        self.tables = TableRenderer(canvas, theme)
        self.banner_truncator = TextTruncator(canvas, theme.banner, max_passes=theme.truncation_max_passes)

        self.report_title = report_title
        self.subtasks_title = subtasks_title
        self.default_issue_type = default_issue_type

    # -------------------------
    # flow helpers
    # -------------------------
    @property
    def geometry(self):
        return self.canvas.geometry

    def remaining(self, cursor: LayoutCursor) -> float:
        return self.geometry.body_bottom - cursor.y

    def move_down(self, cursor: LayoutCursor, lines: float, style: TextStyle):
        cursor.y += lines * style.leading

    def flow_text(self, cursor: LayoutCursor, text: str, style: TextStyle, align: str = 'left') -> float:
        """
        Draw wrapped text at the cursor. A block that fits on an empty page
        is kept together; a taller one continues line by line on the
        following pages.
        """
        geo = self.geometry
        lines = self.canvas.split_lines(text, geo.content_width, style)
        height = len(lines) * style.leading
        if not lines:
            return 0.0
        if cursor.y + height > geo.body_bottom and cursor.y > geo.body_top and height <= geo.body_height:
            self.canvas.add_page(cursor)

        while lines:
            room = int((geo.body_bottom - cursor.y) // style.leading)
            if room < 1 and cursor.y > geo.body_top:
                self.canvas.add_page(cursor)
                continue
            # a line taller than the whole body still goes out, one per page
            take = max(1, room)
            chunk, lines = lines[:take], lines[take:]
            cursor.y += self.canvas.draw_lines(chunk, geo.margin_left, cursor.y, geo.content_width, style, align)
            if lines:
                self.canvas.add_page(cursor)
        return height

    def draw_divider(self, cursor: LayoutCursor):
        geo = self.geometry
        self.canvas.draw_line(geo.margin_left, cursor.y, geo.width - geo.margin_right, cursor.y,
                              self.theme.border, self.theme.border_width)
        self.move_down(cursor, 0.4, self.theme.body)

    def ensure_space(self, cursor: LayoutCursor, needed: float, divider: bool = False) -> bool:
        """
        Start a new page when less than `needed` remains. Otherwise draw the
        requested divider, except right at the top of a page or when fewer
        than MIN_ROOM_BELOW_DIVIDER points would follow it. Returns True on a
        page break.
        """
        if self.remaining(cursor) < needed:
            self.canvas.add_page(cursor)
            return True
        if divider:
            at_top = abs(cursor.y - self.geometry.body_top) < TOP_TOLERANCE
            enough_below = self.remaining(cursor) > MIN_ROOM_BELOW_DIVIDER
            if not at_top and enough_below:
                self.draw_divider(cursor)
        return False

    # -------------------------
    # header & titles
    # -------------------------
    def draw_report_header(self, cursor: LayoutCursor, issue: CaseRecord):
        t = self.theme
        geo = self.geometry

        self.flow_text(cursor, self.report_title, t.title, align='center')
        self.move_down(cursor, 0.3, t.title)

        self.flow_text(cursor, f"{issue.key or ''} — {issue.summary or ''}", t.identity, align='center')
        self.move_down(cursor, 0.2, t.identity)

        facts = (
            f"Assignee: {issue.assignee_name or 'Unassigned'} | Status: {issue.status or 'N/A'} | "
            f"Resolved: {format_date(issue.resolution_date)} | Priority: {issue.priority or 'None'}"
        )
        self.flow_text(cursor, facts, t.facts, align='center')
        self.move_down(cursor, 0.6, t.facts)

        if cursor.y <= geo.body_bottom:
            self.canvas.draw_line(geo.margin_left, cursor.y, geo.width - geo.margin_right, cursor.y, t.border, 1.0)
        self.move_down(cursor, 0.8, t.facts)

    def draw_section_title(self, cursor: LayoutCursor, text: str):
        self.ensure_space(cursor, SECTION_TITLE_SPACE, divider=True)
        self.flow_text(cursor, text, self.theme.section)
        self.move_down(cursor, 0.2, self.theme.section)

    def draw_subsection_title(self, cursor: LayoutCursor, text: str):
        self.ensure_space(cursor, SUBSECTION_TITLE_SPACE, divider=True)
        self.flow_text(cursor, text, self.theme.subsection)
        self.move_down(cursor, 0.1, self.theme.subsection)

    def draw_empty_note(self, cursor: LayoutCursor, text: str):
        self.flow_text(cursor, text, self.theme.note)
        self.move_down(cursor, 0.3, self.theme.note)

    # -------------------------
    # subtask blocks
    # -------------------------
    def draw_subtask_header(self, cursor: LayoutCursor, task: CaseRecord, index: int):
        t = self.theme
        geo = self.geometry
        text_width = geo.content_width - BANNER_PAD_X * 2
        below_banner = SUBTASK_BANNER_SPACE - BANNER_HEIGHT

        # the banner plus the room kept below it must fit on an empty page
        max_text_h = geo.body_height - BANNER_PAD_Y * 2 - below_banner
        text = self.banner_truncator.fit_to_height(
            f"Task {index}: {task.key or ''} — {task.summary or ''}", text_width, max_text_h)
        banner_h = max(BANNER_HEIGHT, self.canvas.measure_height(text, text_width, t.banner) + BANNER_PAD_Y * 2)

        self.ensure_space(cursor, banner_h + below_banner, divider=True)
        y = cursor.y
        self.canvas.draw_rect(geo.margin_left, y, geo.content_width, banner_h, fill_color=t.header_bg)
        self.canvas.draw_text(text, geo.margin_left + BANNER_PAD_X, y + BANNER_PAD_Y, text_width, t.banner)
        cursor.y = y + banner_h + (BANNER_ADVANCE - BANNER_HEIGHT)

    def draw_mini_meta(self, cursor: LayoutCursor, task: CaseRecord):
        self.ensure_space(cursor, META_LINE_SPACE, divider=True)
        self.flow_text(
            cursor,
            f"Status: {task.status or 'N/A'} | Assignee: {task.assignee_name or 'Unassigned'} | "
            f"Closed: {format_date(task.resolution_date)}",
            self.theme.facts,
        )
        self.move_down(cursor, 0.2, self.theme.facts)

    # -------------------------
    # tables
    # -------------------------
    def draw_table(self, cursor: LayoutCursor, columns: Sequence[ColumnSpec], rows, zebra: bool = True) -> RenderedTable:
        self.ensure_space(cursor, TABLE_SPACE, divider=True)
        result = self.tables.render(cursor, columns, rows, zebra=zebra)
        cursor.y += self.theme.table_gap_after
        return result

    def draw_details_table(self, cursor: LayoutCursor, issue: CaseRecord) -> RenderedTable:
        rows = [
            {'field': 'Key', 'value': issue.key or 'N/A'},
            {'field': 'Summary', 'value': issue.summary or 'N/A'},
            {'field': 'Type', 'value': issue.type or self.default_issue_type},
            {'field': 'Assignee', 'value': issue.assignee_name or 'Unassigned'},
            {'field': 'Status', 'value': issue.status or 'N/A'},
            {'field': 'Priority', 'value': issue.priority or 'None'},
            {'field': 'Closed Date', 'value': format_date(issue.resolution_date)},
        ]
        columns = [
            ColumnSpec('Field', 'field', 130),
            ColumnSpec('Value', 'value', self.geometry.content_width - 130),
        ]
        return self.draw_table(cursor, columns, rows)

    def draw_changelog_table(self, cursor: LayoutCursor, activity) -> RenderedTable:
        columns = [
            ColumnSpec('Author', 'author', 100),
            ColumnSpec('Field', 'field', 100),
            ColumnSpec('From', 'from_value', 170),
            ColumnSpec('To', 'to_value', 170),
            ColumnSpec('Date', 'created', 90, render=format_date),
        ]
        rows = [
            {
                'author': a.author or '',
                'field': a.field or '',
                'from_value': a.from_value or '',
                'to_value': a.to_value or '',
                'created': a.created,
            }
            for a in activity
        ]
        return self.draw_table(cursor, columns, rows)

    def draw_comments_table(self, cursor: LayoutCursor, comments) -> RenderedTable:
        columns = [
            ColumnSpec('Author', 'author', 120),
            ColumnSpec('Created', 'created', 90, render=format_date),
            ColumnSpec('Comment', 'body', self.geometry.content_width - 210),
        ]
        rows = [{'author': c.author or 'Unknown', 'created': c.created, 'body': c.body or ''} for c in comments]
        return self.draw_table(cursor, columns, rows)

    def draw_changelog_section(self, cursor: LayoutCursor, activity):
        if activity:
            self.draw_changelog_table(cursor, activity)
        else:
            self.draw_empty_note(cursor, 'No changelog entries')

    def draw_comments_section(self, cursor: LayoutCursor, comments):
        if comments:
            self.draw_comments_table(cursor, comments)
        else:
            self.draw_empty_note(cursor, 'No comments')

    def draw_subtask(self, cursor: LayoutCursor, task: CaseRecord, index: int):
        self.ensure_space(cursor, SUBTASK_BLOCK_SPACE, divider=True)
        self.draw_subtask_header(cursor, task, index)
        self.draw_mini_meta(cursor, task)

        self.draw_subsection_title(cursor, 'Changelog')
        self.draw_changelog_section(cursor, task.activity)

        self.draw_subsection_title(cursor, 'Comments')
        self.draw_comments_section(cursor, task.comments)

    # -------------------------
    # whole report
    # -------------------------
    def layout_report(self, cursor: LayoutCursor, parent: CaseRecord, subtasks: Sequence[CaseRecord]):
        self.draw_report_header(cursor, parent)

        self.draw_section_title(cursor, 'Parent Issue Details')
        self.draw_details_table(cursor, parent)

        self.draw_section_title(cursor, 'Parent Issue Changelog')
        self.draw_changelog_section(cursor, parent.activity)

        self.draw_section_title(cursor, 'Parent Issue Comments')
        self.draw_comments_section(cursor, parent.comments)

        if subtasks:
            self.draw_section_title(cursor, self.subtasks_title)
            for i, task in enumerate(subtasks, start=1):
                logger.debug("Laying out subtask %d/%d (%s)", i, len(subtasks), task.key)
                self.draw_subtask(cursor, task, i)
