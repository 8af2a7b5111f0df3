# audit_report/config.py
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """
    Central configuration for the audit report service. Every font, size,
    color and spacing used by the PDF engine is read from here, so the look
    of the report can be changed without touching the layout code.
    """

    # -------------------------
    # Paths
    # -------------------------
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOG_PATH = os.environ.get('LOG_PATH', os.path.join(os.path.dirname(BASE_DIR), 'app.log'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # -------------------------
    # Fonts
    # Empty paths keep the built-in Helvetica family.
    # -------------------------
    FONT_REGULAR_PATH = os.environ.get('FONT_REGULAR_PATH', '')
    FONT_BOLD_PATH = os.environ.get('FONT_BOLD_PATH', '')
    FONT_ITALIC_PATH = os.environ.get('FONT_ITALIC_PATH', '')
    FONT_REGULAR_NAME = 'AuditSans'
    FONT_BOLD_NAME = 'AuditSans-Bold'
    FONT_ITALIC_NAME = 'AuditSans-Oblique'

    # -------------------------
    # Page geometry (points), A4 portrait
    # -------------------------
    PAGE_WIDTH = 595.28
    PAGE_HEIGHT = 841.89
    MARGIN_TOP = 40.0
    MARGIN_BOTTOM = 50.0
    MARGIN_LEFT = 30.0
    MARGIN_RIGHT = 30.0
    # strip kept free above the bottom margin; page numbers go below the body
    FOOTER_STRIP_HEIGHT = 20.0
    FOOTER_OFFSET = 18.0

    # -------------------------
    # Font sizes (points)
    # -------------------------
    TITLE_FONT_SIZE = 16.0
    IDENTITY_FONT_SIZE = 11.0
    SECTION_FONT_SIZE = 12.0
    SUBSECTION_FONT_SIZE = 10.0
    BODY_FONT_SIZE = 8.0
    FOOTER_FONT_SIZE = 8.0
    LEADING_MULTIPLIER = 1.2

    # -------------------------
    # Colors
    # -------------------------
    TEXT_COLOR = '#172B4D'
    SUBTLE_TEXT_COLOR = '#6B778C'
    SECONDARY_TEXT_COLOR = '#333333'
    BORDER_COLOR = '#DFE1E6'
    HEADER_BG_COLOR = '#F4F5F7'
    ROW_ALT_COLOR = '#FAFBFC'
    FOOTER_TEXT_COLOR = '#999999'

    # -------------------------
    # Table spacing (points)
    # -------------------------
    CELL_PAD_X = 6.0
    CELL_PAD_Y = 4.0
    HEADER_PAD_Y = 6.0
    MIN_ROW_HEIGHT = 18.0
    MIN_HEADER_HEIGHT = 20.0
    FRESH_PAGE_SAFETY = 2.0
    TABLE_GAP_AFTER = 6.0
    BORDER_WIDTH = 0.5
    TRUNCATION_MAX_PASSES = 12

    # -------------------------
    # Report text
    # -------------------------
    REPORT_TITLE = os.environ.get('AUDIT_REPORT_TITLE', 'GDPR Data Rights Request — Audit Report')
    DEFAULT_ISSUE_TYPE = 'GDPR'
    SUBTASKS_TITLE = 'Related GDPR Tasks'
    FILENAME_SUFFIX = ' - Audit Report.pdf'

    DEBUG = False
    TESTING = False
