from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Tuple

from ..domain.constants import DEFAULT_ALGORITHM, HMAC_ALGORITHMS, KeyEncoding


@dataclass(slots=True)
class TokenSettings:
    """
    Signing key + defaults for issuing and verifying tokens.

    Host code decides how to construct this (env, config file, etc.).
    """
    secret_key: str
    algorithm: str = DEFAULT_ALGORITHM
    validity: timedelta = field(default_factory=lambda: timedelta(hours=1))
    allowed_algorithms: Tuple[str, ...] = HMAC_ALGORITHMS
    leeway_seconds: float = 0
    key_encoding: KeyEncoding = KeyEncoding.RAW

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("TokenSettings.secret_key must not be empty")
        if self.algorithm not in self.allowed_algorithms:
            raise ValueError(
                f"Signing algorithm {self.algorithm!r} is not among the allowed "
                f"verification algorithms {self.allowed_algorithms!r}"
            )

    def __repr__(self) -> str:
        # keep the key out of logs and tracebacks
        return (
            f"TokenSettings(secret_key='***', algorithm={self.algorithm!r}, "
            f"validity={self.validity!r}, allowed_algorithms={self.allowed_algorithms!r}, "
            f"leeway_seconds={self.leeway_seconds!r}, key_encoding={self.key_encoding.value!r})"
        )
