# audit_report/pdf/geometry.py
from dataclasses import dataclass


@dataclass(frozen=True)
class PageGeometry:
    """
    Page size and margins for one report. The footer strip sits between the
    page body and the bottom margin and is never used by content.
    """
    width: float
    height: float
    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float
    footer_strip: float = 20.0

    @classmethod
    def from_config(cls, config):
        return cls(
            width=float(getattr(config, 'PAGE_WIDTH', 595.28)),
            height=float(getattr(config, 'PAGE_HEIGHT', 841.89)),
            margin_top=float(getattr(config, 'MARGIN_TOP', 40.0)),
            margin_bottom=float(getattr(config, 'MARGIN_BOTTOM', 50.0)),
            margin_left=float(getattr(config, 'MARGIN_LEFT', 30.0)),
            margin_right=float(getattr(config, 'MARGIN_RIGHT', 30.0)),
            footer_strip=float(getattr(config, 'FOOTER_STRIP_HEIGHT', 20.0)),
        )

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def body_top(self) -> float:
        return self.margin_top

    @property
    def body_bottom(self) -> float:
        return self.height - self.margin_bottom - self.footer_strip

    @property
    def body_height(self) -> float:
        return self.body_bottom - self.body_top

    def in_footer_strip(self, y: float) -> bool:
        return self.body_bottom <= y <= self.height


@dataclass
class LayoutCursor:
    """Current page (0-based) and vertical offset from the top edge."""
    page_index: int = 0
    y: float = 0.0
