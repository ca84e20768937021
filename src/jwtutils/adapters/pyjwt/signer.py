from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import jwt
from jwt.exceptions import InvalidKeyError

from ...domain.constants import KeyEncoding
from ...domain.ports import TokenSigner

# Only signature, `exp` and `nbf` are enforced. Registered claims the caller
# chose to embed (`aud`, `sub`, `jti`) are carried, not judged.
_DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_sub": False,
    "verify_jti": False,
}


@dataclass(frozen=True, slots=True)
class PyJWTSigner(TokenSigner):
    """
    Adapter implementing the TokenSigner port with PyJWT.

    Infrastructure layer:
    - Knows about JWS compact serialization and signature checks.
    - Holds no keys; every call receives the secret it needs.

    `leeway` is the clock skew (seconds) tolerated when checking `exp`.
    `key_encoding` says whether the secret string is used as-is (RAW) or is
    base64 of the key bytes (BASE64, the convention of jjwt's string-key API).
    """

    leeway: float = 0
    key_encoding: KeyEncoding = KeyEncoding.RAW

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def sign(self, claims: Mapping[str, Any], secret_key: str, algorithm: str) -> str:
        return jwt.encode(dict(claims), self._key(secret_key), algorithm=algorithm)

    def verify(
            self,
            token: str,
            secret_key: str,
            algorithms: Sequence[str],
    ) -> Mapping[str, Any]:
        """
        Decode and verify a compact token.

        Raises:
            jwt.ExpiredSignatureError
            jwt.InvalidSignatureError
            jwt.DecodeError
            jwt.InvalidKeyError for a BASE64 key that does not decode
            or any other jwt.PyJWTError reported by PyJWT
        """
        return jwt.decode(
            token,
            self._key(secret_key),
            algorithms=list(algorithms),
            options=_DECODE_OPTIONS,
            leeway=self.leeway,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _key(self, secret_key: str) -> str | bytes:
        if self.key_encoding is KeyEncoding.RAW:
            return secret_key
        try:
            return base64.b64decode(secret_key)
        except (binascii.Error, TypeError, ValueError) as exc:
            raise InvalidKeyError(f"Secret key is not valid base64: {exc}") from exc
