# audit_report/pdf/tables.py
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .geometry import LayoutCursor
from .theme import Theme
from .truncation import TextTruncator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    key: str
    width: float
    render: Optional[Callable[[Any], Any]] = None

    def cell_text(self, row: Mapping[str, Any]) -> str:
        raw = row.get(self.key)
        if self.render is not None:
            raw = self.render(raw)
        return '' if raw is None else str(raw)


def normalize_columns(columns: Sequence[ColumnSpec], available: float) -> List[ColumnSpec]:
    """
    Scale widths down proportionally when they overflow the available width.
    Scaled widths are floored to whole points and the remainder goes to the
    last column, so the total is exactly `available`.
    """
    cols = list(columns)
    total = sum(float(c.width or 0) for c in cols)
    if total <= available or not cols:
        return cols

    scale = available / total
    widths = [math.floor(float(c.width or 0) * scale) for c in cols]
    widths[-1] += available - sum(widths)
    return [replace(c, width=w) for c, w in zip(cols, widths)]


@dataclass
class RenderedTable:
    """What a table render decided: widths, heights and the page of every row."""
    widths: List[float]
    header_height: float
    row_heights: List[float] = field(default_factory=list)
    row_pages: List[int] = field(default_factory=list)
    cell_texts: List[List[str]] = field(default_factory=list)
    truncated_rows: List[int] = field(default_factory=list)

    @property
    def page_breaks(self) -> List[int]:
        """Indexes of rows that start a new page."""
        return [i for i in range(1, len(self.row_pages)) if self.row_pages[i] != self.row_pages[i - 1]]


class TableRenderer:
    def __init__(self, canvas, theme: Theme):
        self.canvas = canvas
        self.theme = theme
        self.truncator = TextTruncator(canvas, theme.body, max_passes=theme.truncation_max_passes)

    def _inner_width(self, col: ColumnSpec) -> float:
        return max(1.0, col.width - self.theme.cell_pad_x * 2)

    def header_height(self, cols: Sequence[ColumnSpec]) -> float:
        t = self.theme
        heights = [self.canvas.measure_height(c.header or '', self._inner_width(c), t.header_cell) for c in cols]
        return max(t.min_header_height, max(heights, default=0.0) + t.header_pad_y * 2)

    def _draw_header(self, y, cols, header_h):
        t = self.theme
        left = self.canvas.geometry.margin_left
        width = self.canvas.geometry.content_width
        self.canvas.draw_rect(left, y, width, header_h, fill_color=t.header_bg)
        self.canvas.draw_rect(left, y, width, header_h, stroke_color=t.border, line_width=t.border_width)
        x = left
        for c in cols:
            self.canvas.draw_text(c.header or '', x + t.cell_pad_x, y + t.header_pad_y, self._inner_width(c), t.header_cell)
            x += c.width

    def _row_height(self, cols, texts):
        t = self.theme
        heights = [self.canvas.measure_height(text, self._inner_width(c), t.body) for c, text in zip(cols, texts)]
        return max(t.min_row_height, max(heights, default=0.0) + t.cell_pad_y * 2)

    def render(self, cursor: LayoutCursor, columns: Sequence[ColumnSpec], rows: Sequence[Mapping[str, Any]], zebra: bool = False) -> RenderedTable:
        t = self.theme
        geo = self.canvas.geometry
        left = geo.margin_left
        max_width = geo.content_width
        cols = normalize_columns(columns, max_width)

        header_h = self.header_height(cols)
        result = RenderedTable(widths=[c.width for c in cols], header_height=header_h)

        self._draw_header(cursor.y, cols, header_h)
        cursor.y += header_h

        # tallest row that still fits below the header on an empty page
        fresh_page_max = geo.body_height - header_h - t.fresh_page_safety
        bottom_limit = geo.body_bottom

        for idx, row in enumerate(rows):
            texts = [c.cell_text(row) for c in cols]
            row_h = self._row_height(cols, texts)

            if row_h > fresh_page_max:
                target = max(t.min_row_height, fresh_page_max) - t.cell_pad_y * 2
                texts = self.truncator.fit_row_to_height([self._inner_width(c) for c in cols], texts, target)
                row_h = self._row_height(cols, texts)
                result.truncated_rows.append(idx)
                logger.debug("Row %d truncated to height %.1f", idx, row_h)

            if cursor.y + row_h > bottom_limit:
                self.canvas.add_page(cursor)
                self._draw_header(cursor.y, cols, header_h)
                cursor.y += header_h

            y = cursor.y
            if zebra and idx % 2 == 1:
                self.canvas.draw_rect(left, y, max_width, row_h, fill_color=t.row_alt)

            self.canvas.draw_line(left, y + row_h, left + max_width, y + row_h, t.border, t.border_width)

            x = left
            for c, text in zip(cols, texts):
                self.canvas.draw_text(text, x + t.cell_pad_x, y + t.cell_pad_y, self._inner_width(c), t.body)
                x += c.width

            cursor.y += row_h
            result.row_heights.append(row_h)
            result.row_pages.append(cursor.page_index)
            result.cell_texts.append(texts)

        return result
