from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .constants import RegisteredClaim


def _numeric_date(value: Any) -> Optional[datetime]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified claims of a token.

    Only ever built from a payload whose signature and expiry were checked.
    """
    claims: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TokenClaims":
        return cls(claims=MappingProxyType(dict(payload)))

    def get(self, key: str) -> Any:
        """Claim value for `key`, or None when the token does not carry it."""
        return self.claims.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.claims

    # --- Registered claims ------------------------------------------------

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get(RegisteredClaim.SUBJECT.value)

    @property
    def issued_at(self) -> Optional[datetime]:
        return _numeric_date(self.claims.get(RegisteredClaim.ISSUED_AT.value))

    @property
    def expires_at(self) -> Optional[datetime]:
        return _numeric_date(self.claims.get(RegisteredClaim.EXPIRATION.value))

    @property
    def custom(self) -> dict[str, Any]:
        """Claims other than the registered ones."""
        reserved = {c.value for c in RegisteredClaim}
        return {k: v for k, v in self.claims.items() if k not in reserved}
