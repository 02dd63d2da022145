# idb_notices/core/errors.py
"""Fatal conditions of an export run. Anything else is absorbed where it happens."""


class ExtractionError(RuntimeError):
    """Base class for errors that terminate the export."""


class EmbedNotFoundError(ExtractionError):
    """The Power BI iframe never showed up on the page."""


class GridNotReadyError(ExtractionError):
    """No grid/table role appeared within the final attempt's timeout."""


class NoDataExtractedError(ExtractionError):
    """Every attempt finished with zero parsed rows."""
