# audit_report/pdf/canvas.py
"""
Page buffer for the audit report.

Drawing never goes straight to a PDF stream. Every page keeps a display
list of rectangles, lines and pre-wrapped text, so finished pages can be
revisited (page numbers are stamped once the page count is known) and
the whole document is written through reportlab in one pass at the end.

Coordinates are measured from the top-left corner of the page, y growing
downwards; they are flipped to PDF space only when replaying.
"""
import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as rl_canvas

from .errors import MeasurementFailure, StreamFailure
from .geometry import LayoutCursor, PageGeometry
from .theme import TextStyle

logger = logging.getLogger(__name__)


class ReportLabMeasurer:
    """
    Wraps text with reportlab font metrics. Words wider than the column are
    broken by character so no line ever exceeds the requested width.
    """
    def __init__(self):
        self._cache = {}

    def _width(self, s, style):
        return pdfmetrics.stringWidth(s, style.font_name, style.font_size)

    def _hard_split(self, line, width, style):
        if self._width(line, style) <= width:
            return [line]
        out = []
        current = ''
        for ch in line:
            if current and self._width(current + ch, style) > width:
                out.append(current.rstrip())
                current = ch.lstrip()
            else:
                current += ch
        if current:
            out.append(current)
        return out

    def split_lines(self, text: str, width: float, style: TextStyle) -> List[str]:
        key = (text, round(width, 3), style.font_name, style.font_size)
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)
        try:
            normalized = str(text).replace('\r\n', '\n').replace('\r', '\n')
            lines = []
            if not normalized:
                self._cache[key] = ()
                return lines
            for ln in simpleSplit(normalized, style.font_name, style.font_size, max(1.0, width)):
                lines.extend(self._hard_split(ln, max(1.0, width), style))
        except Exception as e:
            raise MeasurementFailure(f"Cannot measure text with font {style.font_name!r}: {e}") from e
        self._cache[key] = tuple(lines)
        return lines

    def measure_height(self, text: str, width: float, style: TextStyle) -> float:
        return len(self.split_lines(text, width, style)) * style.leading


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None
    line_width: float = 0.5


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: float = 0.5


@dataclass(frozen=True)
class TextOp:
    lines: Tuple[str, ...]
    x: float
    y: float
    width: float
    style: TextStyle
    align: str = 'left'

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def height(self) -> float:
        return len(self.lines) * self.style.leading


@dataclass
class BufferedPage:
    """A page kept in memory until the document is serialized. number is 1-based."""
    index: int
    ops: list = field(default_factory=list)

    @property
    def number(self) -> int:
        return self.index + 1

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


class DocumentCanvas:
    """
    Page geometry, text measurement and drawing primitives for one report.
    The first page exists as soon as the canvas is created; add_page is the
    only call that grows the document afterwards.
    """
    def __init__(self, geometry: PageGeometry, measurer=None):
        self.geometry = geometry
        self.measurer = measurer or ReportLabMeasurer()
        self._pages: List[BufferedPage] = [BufferedPage(index=0)]
        self._current = 0

    # -------------------------
    # pages
    # -------------------------
    def cursor(self) -> LayoutCursor:
        return LayoutCursor(page_index=self._current, y=self.geometry.body_top)

    def add_page(self, cursor: LayoutCursor) -> BufferedPage:
        page = BufferedPage(index=len(self._pages))
        self._pages.append(page)
        self._current = page.index
        cursor.page_index = page.index
        cursor.y = self.geometry.body_top
        return page

    def buffered_pages(self) -> Tuple[BufferedPage, ...]:
        return tuple(self._pages)

    def switch_to_page(self, page: BufferedPage) -> None:
        if page.index >= len(self._pages) or self._pages[page.index] is not page:
            raise ValueError(f"Page {page.number} does not belong to this document")
        self._current = page.index

    @property
    def current_page(self) -> BufferedPage:
        return self._pages[self._current]

    @property
    def page_count(self) -> int:
        return len(self._pages)

    # -------------------------
    # measurement
    # -------------------------
    def split_lines(self, text, width, style: TextStyle) -> List[str]:
        return self.measurer.split_lines(str(text), width, style)

    def measure_height(self, text, width, style: TextStyle) -> float:
        return self.measurer.measure_height(str(text), width, style)

    # -------------------------
    # drawing
    # -------------------------
    def draw_rect(self, x, y, width, height, fill_color=None, stroke_color=None, line_width=0.5):
        self.current_page.ops.append(RectOp(x, y, width, height, fill_color, stroke_color, line_width))

    def draw_line(self, x1, y1, x2, y2, color, line_width=0.5):
        self.current_page.ops.append(LineOp(x1, y1, x2, y2, color, line_width))

    def draw_text(self, text, x, y, width, style: TextStyle, align='left') -> float:
        """Draw wrapped text with its top at y; returns the height used."""
        return self.draw_lines(self.split_lines(text, width, style), x, y, width, style, align)

    def draw_lines(self, lines, x, y, width, style: TextStyle, align='left') -> float:
        """Draw lines already wrapped to `width`; returns the height used."""
        op = TextOp(tuple(lines), x, y, width, style, align)
        self.current_page.ops.append(op)
        return op.height

    # -------------------------
    # output
    # -------------------------
    def _replay(self, c, page: BufferedPage):
        page_h = self.geometry.height
        for op in page.ops:
            if isinstance(op, RectOp):
                c.setLineWidth(op.line_width)
                if op.fill_color:
                    c.setFillColor(colors.HexColor(op.fill_color))
                if op.stroke_color:
                    c.setStrokeColor(colors.HexColor(op.stroke_color))
                c.rect(op.x, page_h - op.y - op.height, op.width, op.height,
                       stroke=1 if op.stroke_color else 0, fill=1 if op.fill_color else 0)
            elif isinstance(op, LineOp):
                c.setLineWidth(op.line_width)
                c.setStrokeColor(colors.HexColor(op.color))
                c.line(op.x1, page_h - op.y1, op.x2, page_h - op.y2)
            elif isinstance(op, TextOp):
                st = op.style
                c.setFont(st.font_name, st.font_size)
                c.setFillColor(colors.HexColor(st.color))
                ascent = pdfmetrics.getAscent(st.font_name, st.font_size)
                for i, ln in enumerate(op.lines):
                    baseline = page_h - (op.y + ascent + i * st.leading)
                    if op.align == 'center':
                        c.drawCentredString(op.x + op.width / 2.0, baseline, ln)
                    elif op.align == 'right':
                        c.drawRightString(op.x + op.width, baseline, ln)
                    else:
                        c.drawString(op.x, baseline, ln)

    def to_bytes(self, title: str = '', author: str = '') -> bytes:
        buffer = io.BytesIO()
        try:
            c = rl_canvas.Canvas(buffer, pagesize=(self.geometry.width, self.geometry.height))
            if title:
                c.setTitle(title)
            if author:
                c.setAuthor(author)
            for page in self._pages:
                c.saveState()
                self._replay(c, page)
                c.restoreState()
                c.showPage()
            c.save()
        except Exception as e:
            logger.exception("Failed to write PDF stream")
            raise StreamFailure(f"Failed to write PDF stream: {e}") from e
        return buffer.getvalue()
