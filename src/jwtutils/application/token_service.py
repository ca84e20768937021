from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from ..adapters.pyjwt.signer import PyJWTSigner
from ..domain.constants import (
    DEFAULT_ALGORITHM,
    HMAC_ALGORITHMS,
    TOKEN_PREFIX,
    RegisteredClaim,
)
from ..domain.entities import TokenClaims
from ..domain.ports import TokenSigner
from ..domain.value_objects import Validity, ValidityLike

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _accepted(algorithms: Optional[Sequence[str]]) -> Sequence[str]:
    # an explicit empty list stays empty and accepts nothing
    return HMAC_ALGORITHMS if algorithms is None else algorithms


@dataclass(frozen=True, slots=True)
class TokenService:
    """
    Application service: issue, verify and read JWTs.

    Holds no keys and no mutable state. The signer does the cryptography,
    the clock is read once per issued token.

    Failure policies:
      - `validate_token` maps every failure to False and never raises.
      - `get_subject` / `get_claim` / `get_claims` let the signer's error
        propagate unchanged.
    """

    signer: TokenSigner = field(default_factory=PyJWTSigner)
    clock: Callable[[], datetime] = _utcnow

    # ------------------------------------------------------------------ #
    # Issuing
    # ------------------------------------------------------------------ #

    def create_token(
            self,
            subject: str,
            claims: Optional[Mapping[str, Any]] = None,
            *,
            validity: ValidityLike,
            secret_key: str,
            algorithm: str = DEFAULT_ALGORITHM,
    ) -> str:
        """
        Sign `claims` plus `sub`, `iat` and `exp` into a compact token.

        `validity` may be a timedelta, an (amount, unit) pair, a Validity
        or a number of milliseconds. Caller claims may override `sub`;
        `iat` and `exp` are always set here.

        Raises:
            TypeError  if subject is not a string
            ValueError if secret_key is empty or validity is out of range
        """
        if not isinstance(subject, str):
            raise TypeError(f"subject must be a string, got {type(subject).__name__}")
        if not isinstance(secret_key, str) or not secret_key:
            raise ValueError("secret_key must be a non-empty string")

        lifetime = Validity.of(validity)
        issued_at = self.clock()
        try:
            expires_at = issued_at + lifetime.duration
        except OverflowError as exc:
            raise ValueError(f"Validity {lifetime} puts expiry out of range") from exc

        payload: dict[str, Any] = {RegisteredClaim.SUBJECT.value: subject}
        payload.update(claims or {})
        payload[RegisteredClaim.ISSUED_AT.value] = issued_at
        payload[RegisteredClaim.EXPIRATION.value] = expires_at

        token = self.signer.sign(payload, secret_key, algorithm)
        logger.debug("Issued %s token for subject %r valid for %s", algorithm, subject, lifetime)
        return token

    # ------------------------------------------------------------------ #
    # Verifying
    # ------------------------------------------------------------------ #

    def validate_token(
            self,
            token: Optional[str],
            secret_key: Optional[str],
            algorithms: Optional[Sequence[str]] = None,
    ) -> bool:
        """
        True if the token verifies under `secret_key` and has not expired.

        Any failure (garbage input, wrong key, tampering, expiry, disallowed
        algorithm) is reported as False; callers cannot tell them apart.
        """
        try:
            self.signer.verify(token, secret_key, _accepted(algorithms))
        except Exception as exc:  # noqa: BLE001
            logger.debug("Rejected token: %s: %s", type(exc).__name__, exc)
            return False
        return True

    def get_claims(
            self,
            token: str,
            secret_key: str,
            algorithms: Optional[Sequence[str]] = None,
    ) -> TokenClaims:
        """
        Verify the token and return its claims.

        Raises:
            jwt.PyJWTError subclasses exactly as the signer reports them
        """
        payload = self.signer.verify(token, secret_key, _accepted(algorithms))
        return TokenClaims.from_payload(payload)

    def get_subject(
            self,
            token: str,
            secret_key: str,
            algorithms: Optional[Sequence[str]] = None,
    ) -> Optional[str]:
        return self.get_claims(token, secret_key, algorithms).subject

    def get_claim(
            self,
            token: str,
            secret_key: str,
            key: str,
            algorithms: Optional[Sequence[str]] = None,
    ) -> Any:
        """Value of claim `key`, or None if the verified token does not carry it."""
        return self.get_claims(token, secret_key, algorithms).get(key)

    # ------------------------------------------------------------------ #
    # Header parsing
    # ------------------------------------------------------------------ #

    @staticmethod
    def extract_token(authorization_header: Optional[str]) -> Optional[str]:
        """
        Token part of an `Authorization: Bearer <token>` value.

        The prefix match is case-sensitive and nothing is trimmed, so
        "Bearer " yields "" while "Bearer" and "bearer x" yield None.
        """
        if authorization_header is None or not authorization_header.startswith(TOKEN_PREFIX):
            return None
        return authorization_header[len(TOKEN_PREFIX):]
