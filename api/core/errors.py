"""
Error taxonomy for the inventory API.

Every error carries the HTTP status it maps to and a message that is safe to
return to the client. `main.py` renders them as `{"error": message}`; the
underlying cause (if any) is only logged server-side.
"""

from __future__ import annotations


class InventoryError(Exception):
    """Base exception for all inventory API failures."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigError(InventoryError):
    """Raised for missing or invalid runtime configuration."""


class ValidationError(InventoryError):
    """Bad or missing request parameter."""

    status_code = 400


class BadRequestError(ValidationError):
    """Raised when a required query value is empty."""


class UploadRejected(ValidationError):
    """Uploaded file has a type we don't accept; raised before processing."""


class UploadTooLarge(ValidationError):
    status_code = 413


class ParseError(InventoryError):
    """Uploaded bytes are not a readable workbook."""


class EmptyWorkbookError(ParseError):
    """Workbook parsed but contains no sheets."""


class PersistenceError(InventoryError):
    """Store write or connection failure."""


class ObjectStorageError(InventoryError):
    """External object storage rejected or failed an upload."""

    status_code = 502
