"""Errors raised by the broker CSV ingestion engine."""


class IngestionError(ValueError):
    """
    Run-level failure: the input cannot be processed at all.

    Row-level problems never raise this; they are absorbed into
    ParsedResult.errors. Raised for an empty input (no header line) and for
    invalid import selections.
    """

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value
