# audit_report/pdf/errors.py


class ReportError(Exception):
    """Base class for audit report engine failures."""


class MeasurementFailure(ReportError):
    """The canvas could not measure a piece of text."""


class StreamFailure(ReportError):
    """Writing the buffered pages out as PDF bytes failed."""


class ReportGenerationError(ReportError):
    """Single failure surfaced by the composer; wraps the original cause."""
