"""Errors raised by the MGNREGA ingestion pipeline.

IngestionError and its subclasses abort a run before the stored dataset is
touched. RecordValidationError only rejects a single upstream record.
"""


class IngestionError(RuntimeError):
    """Base error for a failed ingestion run."""


class UpstreamFetchError(IngestionError):
    """Raised when the data.gov.in request fails or returns an unreadable body."""


class UpstreamAPIError(IngestionError):
    """Raised when data.gov.in answers with an error payload."""

    def __init__(self, message, payload=None):
        super().__init__(message)
        self.payload = payload or {}


class DatasetReplaceError(IngestionError):
    """Raised when the delete-and-insert transaction is rolled back."""


class RecordValidationError(ValueError):
    """Raised when one upstream record cannot be normalized."""

    def __init__(self, reason, district_name=None):
        super().__init__(reason)
        self.reason = reason
        self.district_name = district_name
