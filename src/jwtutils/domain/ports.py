from __future__ import annotations

from typing import Protocol, Mapping, Any, Sequence


class TokenSigner(Protocol):
    """
    Port for turning a claims mapping into a compact token and back.

    Implementations live in the adapters layer (e.g. PyJWT signer).
    """

    def sign(self, claims: Mapping[str, Any], secret_key: str, algorithm: str) -> str:
        """Encode and sign `claims`, returning a compact `header.payload.signature`."""
        ...

    def verify(
            self,
            token: str,
            secret_key: str,
            algorithms: Sequence[str],
    ) -> Mapping[str, Any]:
        """
        Verify the token and return its claims.

        Should:
          - verify signature
          - reject expired tokens
        Raises:
          - whatever the underlying library raises (never swallowed here)
        """
        ...
