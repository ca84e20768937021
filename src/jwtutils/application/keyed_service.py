from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .token_service import TokenService
from ..adapters.pyjwt.signer import PyJWTSigner
from ..config.env import settings_from_env
from ..config.settings import TokenSettings
from ..domain.entities import TokenClaims
from ..domain.value_objects import ValidityLike


@dataclass(frozen=True, slots=True)
class KeyedTokenService:
    """
    TokenService with the key, algorithm and default validity bound once.

    Same operations and same failure policies as TokenService; only the
    per-call key/algorithm arguments go away.
    """

    settings: TokenSettings
    service: TokenService

    @classmethod
    def from_settings(cls, settings: TokenSettings) -> "KeyedTokenService":
        signer = PyJWTSigner(leeway=settings.leeway_seconds, key_encoding=settings.key_encoding)
        return cls(settings=settings, service=TokenService(signer=signer))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "KeyedTokenService":
        return cls.from_settings(settings_from_env(environ))

    # --- Core operations --------------------------------------------------

    def create_token(
            self,
            subject: str,
            claims: Optional[Mapping[str, Any]] = None,
            validity: Optional[ValidityLike] = None,
    ) -> str:
        return self.service.create_token(
            subject,
            claims,
            validity=self.settings.validity if validity is None else validity,
            secret_key=self.settings.secret_key,
            algorithm=self.settings.algorithm,
        )

    def validate_token(self, token: Optional[str]) -> bool:
        return self.service.validate_token(
            token, self.settings.secret_key, self.settings.allowed_algorithms
        )

    def get_claims(self, token: str) -> TokenClaims:
        return self.service.get_claims(
            token, self.settings.secret_key, self.settings.allowed_algorithms
        )

    def get_subject(self, token: str) -> Optional[str]:
        return self.get_claims(token).subject

    def get_claim(self, token: str, key: str) -> Any:
        return self.get_claims(token).get(key)

    @staticmethod
    def extract_token(authorization_header: Optional[str]) -> Optional[str]:
        return TokenService.extract_token(authorization_header)
