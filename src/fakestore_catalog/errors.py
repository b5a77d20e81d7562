"""Exceptions raised by the catalog pipeline."""

from pathlib import Path
from typing import Literal

FetchFailure = Literal["exhausted-retries", "transport-error", "parse-error"]


class CatalogError(Exception):
    """Base exception for pipeline errors."""

    pass


class FetchError(CatalogError):
    """The product list could not be fetched or parsed."""

    def __init__(
        self,
        message: str,
        reason: FetchFailure,
        status_code: int | None = None,
        attempts: int = 0,
    ):
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code
        self.attempts = attempts


class WriteError(CatalogError):
    """The grouped catalog could not be written to disk."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class InvalidFormatError(CatalogError):
    """Unrecognized output format."""

    def __init__(self, value: str):
        super().__init__(f"Invalid format '{value}'. Use json or csv.")
        self.value = value
