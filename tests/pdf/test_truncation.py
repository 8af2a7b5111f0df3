import pytest

from audit_report.pdf.truncation import ELLIPSIS, TextTruncator


@pytest.fixture
def truncator(make_canvas, flat_theme, a4_geometry):
    return TextTruncator(make_canvas(a4_geometry), flat_theme.body)


def test_text_that_fits_is_returned_unchanged(truncator):
    assert truncator.fit_to_height('short text', 100, 10) == 'short text'


def test_longest_prefix_with_ellipsis(truncator):
    # width 50 -> 10 glyphs per line; 30pt -> 3 lines -> 29 chars + ellipsis
    out = truncator.fit_to_height('a' * 100, 50, 30)
    assert out == 'a' * 29 + ELLIPSIS


def test_trailing_whitespace_is_trimmed_before_ellipsis(truncator):
    out = truncator.fit_to_height('abcd ' * 40, 50, 10)
    assert out.endswith(ELLIPSIS)
    assert not out[:-1].endswith(' ')


def test_ellipsis_alone_when_nothing_fits(truncator):
    # a single glyph per line: even "a…" needs two lines
    assert truncator.fit_to_height('abcdef', 5, 10) == ELLIPSIS


@pytest.mark.parametrize('length', [50, 333, 5000])
@pytest.mark.parametrize('width', [20, 77, 150])
@pytest.mark.parametrize('max_height', [10, 45, 600])
def test_result_always_within_budget(truncator, length, width, max_height):
    text = ('word ' * length)[:length]
    out = truncator.fit_to_height(text, width, max_height)
    assert truncator.canvas.measure_height(out, width, truncator.style) <= max_height


def test_row_fit_truncates_every_overflowing_cell(truncator):
    out = truncator.fit_row_to_height([50, 50], ['a' * 100, 'b' * 60], 30)

    heights = [truncator.canvas.measure_height(t, 50, truncator.style) for t in out]
    assert max(heights) <= 30
    assert all(t.endswith(ELLIPSIS) for t in out)


def test_row_fit_leaves_cells_within_budget_alone(truncator):
    out = truncator.fit_row_to_height([50, 50], ['a' * 100, 'short'], 30)
    assert out[1] == 'short'


def test_row_fit_stops_at_pass_cap(make_canvas, flat_theme, a4_geometry):
    capped = TextTruncator(make_canvas(a4_geometry), flat_theme.body, max_passes=1)

    out = capped.fit_row_to_height([50, 50], ['a' * 100, 'b' * 60], 30)

    # only the tallest cell was handled in the single pass
    assert out[0] == 'a' * 29 + ELLIPSIS
    assert out[1] == 'b' * 60
