"""
jwtutils

Thin helpers for issuing and verifying JSON Web Tokens on top of PyJWT:
sign claims, pull a bearer token out of an Authorization header, and read
claims back after signature verification.
"""

__version__ = "0.1.0"

from .domain.constants import (
    AUTHORIZATION_HEADER,
    DEFAULT_ALGORITHM,
    HMAC_ALGORITHMS,
    TOKEN_PREFIX,
    KeyEncoding,
    RegisteredClaim,
    TimeUnit,
)
from .domain.entities import TokenClaims
from .domain.exceptions import (
    TokenError,
    InvalidTokenError,
    DecodeError,
    InvalidSignatureError,
    ExpiredSignatureError,
    SettingsError,
)
from .domain.value_objects import Validity
from .domain.ports import TokenSigner

from .application.token_service import TokenService
from .application.keyed_service import KeyedTokenService

from .config import TokenSettings, settings_from_env

# PyJWT adapter
from .adapters.pyjwt.signer import PyJWTSigner

# Static surface
from .jwt_util import (
    create_token,
    validate_token,
    extract_token,
    get_claims,
    get_subject,
    get_claim,
)

__all__ = [
    "__version__",
    # constants
    "TOKEN_PREFIX",
    "AUTHORIZATION_HEADER",
    "DEFAULT_ALGORITHM",
    "HMAC_ALGORITHMS",
    "KeyEncoding",
    "RegisteredClaim",
    "TimeUnit",
    # domain core
    "TokenClaims",
    "Validity",
    "TokenSigner",
    # exceptions
    "TokenError",
    "InvalidTokenError",
    "DecodeError",
    "InvalidSignatureError",
    "ExpiredSignatureError",
    "SettingsError",
    # services
    "TokenService",
    "KeyedTokenService",
    "TokenSettings",
    "settings_from_env",
    # adapters
    "PyJWTSigner",
    # static helpers
    "create_token",
    "validate_token",
    "extract_token",
    "get_claims",
    "get_subject",
    "get_claim",
]
