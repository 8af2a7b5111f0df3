# audit_report/pdf/font_manager.py
import logging
import os

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)


class FontManager:
    """
    FontManager registers TTF fonts when the config points at them.
    Usage:
        fm = FontManager(config=Config)
        # then use fm.FONT_REGULAR / fm.FONT_BOLD / fm.FONT_ITALIC in the theme
    Without font files the built-in Helvetica family is kept.
    """
    def __init__(self, config=None):
        self.FONT_REGULAR = 'Helvetica'
        self.FONT_BOLD = 'Helvetica-Bold'
        self.FONT_ITALIC = 'Helvetica-Oblique'

        if config is not None:
            self._setup_fonts(config)

    def _register(self, name, path):
        if not path or not os.path.exists(path):
            return False
        try:
            pdfmetrics.registerFont(TTFont(name, path))
            return True
        except Exception as e:
            logger.warning("Could not register font %s from %s: %s", name, path, e)
            return False

    def _setup_fonts(self, config):
        reg_path = getattr(config, 'FONT_REGULAR_PATH', '')
        bold_path = getattr(config, 'FONT_BOLD_PATH', '')
        italic_path = getattr(config, 'FONT_ITALIC_PATH', '')
        reg_name = getattr(config, 'FONT_REGULAR_NAME', 'AuditSans')
        bold_name = getattr(config, 'FONT_BOLD_NAME', 'AuditSans-Bold')
        italic_name = getattr(config, 'FONT_ITALIC_NAME', 'AuditSans-Oblique')

        if self._register(reg_name, reg_path):
            self.FONT_REGULAR = reg_name
            # bold/italic fall back to the regular face so the family stays consistent
            self.FONT_BOLD = reg_name
            self.FONT_ITALIC = reg_name

        if self._register(bold_name, bold_path):
            self.FONT_BOLD = bold_name

        if self._register(italic_name, italic_path):
            self.FONT_ITALIC = italic_name
