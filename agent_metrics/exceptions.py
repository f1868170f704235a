"""Errors surfaced to callers of the metrics pipeline."""

from .constants import LogMessage


class FileProcessingError(Exception):
    """Raised when an interaction file cannot be read or parsed at all.

    Row-level defects never raise; they are dropped during ingestion.

    Attributes:
        cause: The underlying exception.
    """

    def __init__(self, cause: BaseException):
        super().__init__(LogMessage.FILE_PROCESSING_FAILED.format(cause))
        self.cause = cause
