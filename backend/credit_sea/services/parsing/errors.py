"""
Credit Sea - Ingestion Errors

Only two conditions abort an ingestion. Missing or unparsable fields are
never errors; they resolve to documented defaults.
"""


class ReportIngestionError(Exception):
    """Base class for fatal ingestion failures."""
    pass


class MalformedInputError(ReportIngestionError):
    """Raised when the uploaded bytes are not well-formed XML."""
    pass


class SchemaError(ReportIngestionError):
    """Raised when well-formed XML is not an INProfileResponse report."""

    def __init__(self, expected_root: str, actual_root: str):
        self.expected_root = expected_root
        self.actual_root = actual_root
        super().__init__(
            f"Invalid XML format: missing <{expected_root}> root element "
            f"(found <{actual_root}>)"
        )
