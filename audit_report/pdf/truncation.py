# audit_report/pdf/truncation.py
"""
Shrinks cell text so a table row fits on a page.

fit_to_height assumes the measured height never decreases as a prefix
grows (true for word-wrapped Latin text with a fixed font). Scripts with
complex shaping can break that assumption; the binary search then returns
a prefix that fits but may not be the longest one.
"""
import logging
from typing import List, Sequence

from .theme import TextStyle

logger = logging.getLogger(__name__)

ELLIPSIS = '…'


class TextTruncator:
    def __init__(self, canvas, style: TextStyle, max_passes: int = 12):
        self.canvas = canvas
        self.style = style
        self.max_passes = max_passes

    def _height(self, text, width):
        return self.canvas.measure_height(text, width, self.style)

    def fit_to_height(self, text, width: float, max_height: float) -> str:
        """Longest prefix (trimmed, ellipsis appended) whose height is within max_height."""
        original = str(text or '')
        if self._height(original, width) <= max_height:
            return original

        lo, hi = 0, len(original)
        best = ''
        while lo <= hi:
            mid = (lo + hi) // 2
            candidate = original[:mid].rstrip() + ELLIPSIS
            if self._height(candidate, width) <= max_height:
                best = candidate
                lo = mid + 1
            else:
                hi = mid - 1
        return best or ELLIPSIS

    def fit_row_to_height(self, widths: Sequence[float], texts: Sequence[str], max_height: float) -> List[str]:
        """
        Truncate the tallest cell until every cell fits max_height, or until
        max_passes rounds have run.
        """
        adjusted = [str(t) for t in texts]
        for _ in range(self.max_passes):
            heights = [self._height(t, w) for t, w in zip(adjusted, widths)]
            current = max(heights) if heights else 0.0
            if current <= max_height:
                break
            idx = heights.index(current)
            logger.debug("Truncating cell %d from height %.1f to %.1f", idx, current, max_height)
            adjusted[idx] = self.fit_to_height(adjusted[idx], widths[idx], max_height)
        return adjusted
