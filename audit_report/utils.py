# audit_report/utils.py
from datetime import date, datetime

from dateutil import parser as date_parser


def format_date(raw) -> str:
    """'2024-01-05T10:00:00.000+0000' -> 'Jan 5, 2024'. Empty -> 'N/A'; unparseable -> raw text."""
    if raw is None or raw == '':
        return 'N/A'
    if isinstance(raw, (datetime, date)):
        d = raw
    else:
        text = str(raw).strip()
        if not text:
            return 'N/A'
        try:
            d = date_parser.parse(text)
        except (ValueError, OverflowError):
            return text
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def report_filename(issue_key: str, suffix: str = ' - Audit Report.pdf') -> str:
    return f"{issue_key}{suffix}"
