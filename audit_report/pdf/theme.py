# audit_report/pdf/theme.py
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextStyle:
    font_name: str = 'Helvetica'
    font_size: float = 8.0
    color: str = '#172B4D'
    leading: float = 9.6


def _style(font_name, size, color, mult):
    return TextStyle(font_name=font_name, font_size=float(size), color=color, leading=float(size) * float(mult))


@dataclass(frozen=True)
class Theme:
    """
    Fills, rules, spacing and text styles for one report. Text colors live
    in the styles. Built once from the config (or directly in tests) and
    handed to every drawing component.
    """
    border: str = '#DFE1E6'
    header_bg: str = '#F4F5F7'
    row_alt: str = '#FAFBFC'

    cell_pad_x: float = 6.0
    cell_pad_y: float = 4.0
    header_pad_y: float = 6.0
    min_row_height: float = 18.0
    min_header_height: float = 20.0
    fresh_page_safety: float = 2.0
    table_gap_after: float = 6.0
    border_width: float = 0.5
    truncation_max_passes: int = 12
    footer_offset: float = 18.0

    title: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 16, '#172B4D', 1.2))
    identity: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 11, '#333333', 1.2))
    facts: TextStyle = field(default_factory=lambda: _style('Helvetica', 8, '#6B778C', 1.2))
    section: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 12, '#172B4D', 1.2))
    subsection: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 10, '#333333', 1.2))
    body: TextStyle = field(default_factory=lambda: _style('Helvetica', 8, '#172B4D', 1.2))
    header_cell: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 8, '#172B4D', 1.2))
    note: TextStyle = field(default_factory=lambda: _style('Helvetica-Oblique', 8, '#6B778C', 1.2))
    banner: TextStyle = field(default_factory=lambda: _style('Helvetica-Bold', 10, '#172B4D', 1.2))
    footer: TextStyle = field(default_factory=lambda: _style('Helvetica', 8, '#999999', 1.2))

    @classmethod
    def from_config(cls, config, font_regular='Helvetica', font_bold='Helvetica-Bold', font_italic='Helvetica-Oblique'):
        def _get(name, default):
            return getattr(config, name, default)

        mult = float(_get('LEADING_MULTIPLIER', 1.2))
        text = _get('TEXT_COLOR', '#172B4D')
        subtle = _get('SUBTLE_TEXT_COLOR', '#6B778C')
        secondary = _get('SECONDARY_TEXT_COLOR', '#333333')
        footer_color = _get('FOOTER_TEXT_COLOR', '#999999')
        body_size = _get('BODY_FONT_SIZE', 8.0)

        return cls(
            border=_get('BORDER_COLOR', '#DFE1E6'),
            header_bg=_get('HEADER_BG_COLOR', '#F4F5F7'),
            row_alt=_get('ROW_ALT_COLOR', '#FAFBFC'),
            cell_pad_x=float(_get('CELL_PAD_X', 6.0)),
            cell_pad_y=float(_get('CELL_PAD_Y', 4.0)),
            header_pad_y=float(_get('HEADER_PAD_Y', 6.0)),
            min_row_height=float(_get('MIN_ROW_HEIGHT', 18.0)),
            min_header_height=float(_get('MIN_HEADER_HEIGHT', 20.0)),
            fresh_page_safety=float(_get('FRESH_PAGE_SAFETY', 2.0)),
            table_gap_after=float(_get('TABLE_GAP_AFTER', 6.0)),
            border_width=float(_get('BORDER_WIDTH', 0.5)),
            truncation_max_passes=int(_get('TRUNCATION_MAX_PASSES', 12)),
            footer_offset=float(_get('FOOTER_OFFSET', 18.0)),
            title=_style(font_bold, _get('TITLE_FONT_SIZE', 16.0), text, mult),
            identity=_style(font_bold, _get('IDENTITY_FONT_SIZE', 11.0), secondary, mult),
            facts=_style(font_regular, body_size, subtle, mult),
            section=_style(font_bold, _get('SECTION_FONT_SIZE', 12.0), text, mult),
            subsection=_style(font_bold, _get('SUBSECTION_FONT_SIZE', 10.0), secondary, mult),
            body=_style(font_regular, body_size, text, mult),
            header_cell=_style(font_bold, body_size, text, mult),
            note=_style(font_italic, body_size, subtle, mult),
            banner=_style(font_bold, _get('SUBSECTION_FONT_SIZE', 10.0), text, mult),
            footer=_style(font_regular, _get('FOOTER_FONT_SIZE', 8.0), footer_color, mult),
        )
