# tests/conftest.py
"""
Shared fixtures for the audit report tests.

Layout decisions are tested against a fake measurer: every glyph is
FAKE_GLYPH_WIDTH points wide and text wraps by characters, so heights are
exact integers and page breaks can be predicted by hand. The flat theme
gives every style a leading of 10 points for the same reason.
"""
from datetime import datetime, timezone

import pytest

from audit_report.models import ActivityItem, Assignee, CaseRecord, Comment
from audit_report.pdf.canvas import DocumentCanvas
from audit_report.pdf.geometry import PageGeometry
from audit_report.pdf.theme import TextStyle, Theme

FAKE_GLYPH_WIDTH = 5.0


class FakeMeasurer:
    def __init__(self, glyph_width=FAKE_GLYPH_WIDTH):
        self.glyph_width = glyph_width
        self.calls = 0

    def split_lines(self, text, width, style):
        self.calls += 1
        per_line = max(1, int(width // self.glyph_width))
        lines = []
        for para in str(text).split('\n'):
            for i in range(0, len(para), per_line):
                lines.append(para[i:i + per_line])
        return lines

    def measure_height(self, text, width, style):
        return len(self.split_lines(text, width, style)) * style.leading


class FailingMeasurer(FakeMeasurer):
    def __init__(self, exc):
        super().__init__()
        self.exc = exc

    def split_lines(self, text, width, style):
        raise self.exc


def _flat(font):
    return TextStyle(font_name=font, font_size=8.0, color='#000000', leading=10.0)


@pytest.fixture
def flat_theme():
    return Theme(
        title=_flat('Helvetica-Bold'),
        identity=_flat('Helvetica-Bold'),
        facts=_flat('Helvetica'),
        section=_flat('Helvetica-Bold'),
        subsection=_flat('Helvetica-Bold'),
        body=_flat('Helvetica'),
        header_cell=_flat('Helvetica-Bold'),
        note=_flat('Helvetica-Oblique'),
        banner=_flat('Helvetica-Bold'),
        footer=_flat('Helvetica'),
    )


@pytest.fixture
def fake_measurer():
    return FakeMeasurer()


@pytest.fixture
def twenty_row_geometry():
    """
    Content width 340. Body from y=40 to y=422: a 22pt header band plus
    exactly twenty 18pt rows.
    """
    return PageGeometry(width=400, height=500, margin_top=40, margin_bottom=58,
                        margin_left=30, margin_right=30, footer_strip=20)


@pytest.fixture
def a4_geometry():
    return PageGeometry(width=595.28, height=841.89, margin_top=40, margin_bottom=50,
                        margin_left=30, margin_right=30, footer_strip=20)


@pytest.fixture
def failing_measurer():
    def _make(exc):
        return FailingMeasurer(exc)
    return _make


@pytest.fixture
def make_canvas(fake_measurer):
    def _make(geometry, measurer=None):
        return DocumentCanvas(geometry, measurer=measurer or fake_measurer)
    return _make


@pytest.fixture
def parent_record():
    return CaseRecord(
        key='CWP-904',
        summary='Erase customer data for account 7731',
        type='GDPR',
        assignee=Assignee(name='Ana Souza'),
        status='Done',
        priority='High',
        resolution_date='2024-03-02T09:15:00.000+0000',
        comments=[],
        activity=[],
    )


@pytest.fixture
def subtask_records():
    created = datetime(2024, 2, 20, 14, 0, tzinfo=timezone.utc)
    return [
        CaseRecord(
            key='CWP-905',
            summary='Remove CRM entries',
            status='Done',
            assignee=Assignee(name='Bruno Lima'),
            resolution_date='2024-02-28T10:00:00.000+0000',
            comments=[Comment(author='Bruno Lima', created=created, body='CRM rows deleted.')],
            activity=[ActivityItem(created=created, author='Bruno Lima', field='status',
                                   from_value='To Do', to_value='Done')],
        ),
        CaseRecord(key='CWP-906', summary='Purge backups', status='In Progress'),
    ]
