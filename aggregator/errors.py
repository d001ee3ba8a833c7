# aggregator/errors.py
"""
Exception types for the ingestion pipeline.

Source-level errors (configuration, fetch) abort one source's run and are
reduced to a log line plus a False result by the IngestionService. None of
them propagate past the orchestrator.
"""


class IngestionError(Exception):
    """Base class for ingestion pipeline errors."""

    pass


class ConfigurationError(IngestionError):
    """Unknown source, missing adapter, or a malformed/incomplete source profile."""

    pass


class FetchError(IngestionError):
    """Transport or upstream API failure while fetching a source."""

    pass


class NetworkError(FetchError):
    """Request never completed (timeout, connection refused, DNS, ...)."""

    pass


class InvalidResponseError(FetchError):
    """Request completed but the response is unusable (bad status, empty or non-JSON body)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UnsupportedDialectError(IngestionError):
    """Storage backend has no INSERT ... ON CONFLICT support."""

    pass
