"""
Static JWT helpers.

Module-level functions over a stateless default TokenService (PyJWT signer,
wall clock). Every call takes the secret key it needs; nothing is cached.

    token = create_token("alice", {"role": "admin"}, validity=(15, "minutes"), secret_key=key)
    validate_token(token, key)            # True
    get_claim(token, key, "role")         # "admin"
    extract_token("Bearer " + token)      # token
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from .application.token_service import TokenService
from .domain.constants import AUTHORIZATION_HEADER, DEFAULT_ALGORITHM, TOKEN_PREFIX
from .domain.entities import TokenClaims
from .domain.value_objects import ValidityLike

_service = TokenService()


def create_token(
        subject: str,
        claims: Optional[Mapping[str, Any]] = None,
        *,
        validity: ValidityLike,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """
    Create a signed token for `subject`.

    `validity` is a timedelta, an (amount, unit) pair such as (2, "hours"),
    a Validity, or a number of milliseconds. Algorithm defaults to HS256.
    """
    return _service.create_token(
        subject,
        claims,
        validity=validity,
        secret_key=secret_key,
        algorithm=algorithm,
    )


def validate_token(
        token: Optional[str],
        secret_key: Optional[str],
        algorithms: Optional[Sequence[str]] = None,
) -> bool:
    """True for a well-signed, unexpired token; False for anything else."""
    return _service.validate_token(token, secret_key, algorithms)


def extract_token(authorization_header: Optional[str]) -> Optional[str]:
    return TokenService.extract_token(authorization_header)


def get_claims(
        token: str,
        secret_key: str,
        algorithms: Optional[Sequence[str]] = None,
) -> TokenClaims:
    return _service.get_claims(token, secret_key, algorithms)


def get_subject(
        token: str,
        secret_key: str,
        algorithms: Optional[Sequence[str]] = None,
) -> Optional[str]:
    """Subject of a verified token. Raises jwt.PyJWTError if verification fails."""
    return _service.get_subject(token, secret_key, algorithms)


def get_claim(
        token: str,
        secret_key: str,
        key: str,
        algorithms: Optional[Sequence[str]] = None,
) -> Any:
    """Claim `key` of a verified token, or None. Raises jwt.PyJWTError if verification fails."""
    return _service.get_claim(token, secret_key, key, algorithms)


__all__ = [
    "TOKEN_PREFIX",
    "AUTHORIZATION_HEADER",
    "DEFAULT_ALGORITHM",
    "create_token",
    "validate_token",
    "extract_token",
    "get_claims",
    "get_subject",
    "get_claim",
]
