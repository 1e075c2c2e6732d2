"""
Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to, a client-facing message and
an optional detail (usually the underlying driver message).
"""

from typing import Optional


class ClipshareError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ClipshareError):
    status_code = 400


class MissingFields(ValidationError):
    status_code = 400


class UnsupportedMediaType(ValidationError):
    status_code = 415


class PayloadTooLarge(ValidationError):
    status_code = 413


class AuthError(ClipshareError):
    status_code = 401


class InvalidCredentials(AuthError):
    status_code = 401


class DuplicateUsername(AuthError):
    status_code = 400


class StoreError(ClipshareError):
    status_code = 500
