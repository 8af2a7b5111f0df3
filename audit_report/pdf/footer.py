# audit_report/pdf/footer.py
import logging

from .theme import Theme

logger = logging.getLogger(__name__)


class FooterStamper:
    """
    Second pass over the finished document: writes "Page i of N" into the
    footer strip of every buffered page. Runs once, after layout, because N
    is only known when the last page exists.
    """
    def __init__(self, canvas, theme: Theme):
        self.canvas = canvas
        self.theme = theme

    def label(self, number: int, total: int) -> str:
        return f"Page {number} of {total}"

    def stamp(self) -> int:
        geo = self.canvas.geometry
        style = self.theme.footer
        pages = self.canvas.buffered_pages()
        total = len(pages)

        y = geo.height - self.theme.footer_offset
        # keep the stamp inside the reserved strip even with unusual offsets
        y = max(geo.body_bottom, min(y, geo.height - style.leading))

        for page in pages:
            self.canvas.switch_to_page(page)
            self.canvas.draw_text(self.label(page.number, total), 0, y, geo.width, style, align='center')

        if self.canvas.page_count != total:
            raise RuntimeError("Footer pass changed the page count")
        logger.debug("Stamped %d page footers", total)
        return total
