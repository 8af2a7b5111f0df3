from .canvas import BufferedPage, DocumentCanvas, ReportLabMeasurer
from .composer import GeneratedReport, ReportComposer
from .errors import MeasurementFailure, ReportError, ReportGenerationError, StreamFailure
from .footer import FooterStamper
from .geometry import LayoutCursor, PageGeometry
from .layout import ReportLayout
from .tables import ColumnSpec, RenderedTable, TableRenderer, normalize_columns
from .theme import TextStyle, Theme
from .truncation import ELLIPSIS, TextTruncator
