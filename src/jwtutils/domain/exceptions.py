"""
Error types surfaced by jwtutils.

Verification failures are PyJWT's own exceptions, re-exported here so callers
can catch them without importing `jwt` themselves. No extra taxonomy is added
on top of what the signing library reports.
"""

from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    InvalidTokenError,
    PyJWTError,
)

# Base class of every verification failure.
TokenError = PyJWTError


class SettingsError(RuntimeError):
    """Raised when token settings are missing or malformed."""
    pass


__all__ = [
    "TokenError",
    "PyJWTError",
    "InvalidTokenError",
    "DecodeError",
    "InvalidSignatureError",
    "ExpiredSignatureError",
    "InvalidAlgorithmError",
    "SettingsError",
]
