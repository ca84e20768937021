from __future__ import annotations

import math
import os
from datetime import timedelta
from typing import Mapping, Optional

from .settings import TokenSettings
from ..domain.constants import DEFAULT_ALGORITHM, HMAC_ALGORITHMS, KeyEncoding
from ..domain.exceptions import SettingsError

SECRET_KEY_VAR = "JWT_SECRET_KEY"
ALGORITHM_VAR = "JWT_ALGORITHM"
VALIDITY_VAR = "JWT_VALIDITY_SECONDS"
ALLOWED_ALGORITHMS_VAR = "JWT_ALLOWED_ALGORITHMS"
LEEWAY_VAR = "JWT_LEEWAY_SECONDS"
KEY_ENCODING_VAR = "JWT_KEY_ENCODING"

DEFAULT_VALIDITY_SECONDS = 3600


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> TokenSettings:
    """
    Build TokenSettings from environment variables.

    JWT_SECRET_KEY is required. Every problem found is reported in a single
    SettingsError.
    """
    env = os.environ if environ is None else environ

    def _get(key: str) -> Optional[str]:
        raw = env.get(key)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    def _seconds(key: str, default: float) -> float:
        raw = _get(key)
        if raw is None:
            return default
        try:
            value = float(raw)
        except ValueError:
            problems.append(f"{key} must be a number, got {raw!r}")
            return default
        if not math.isfinite(value) or value < 0:
            problems.append(f"{key} must be a finite, non-negative number, got {raw!r}")
            return default
        return value

    def _split_csv(key: str) -> list[str]:
        raw = _get(key)
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    problems: list[str] = []

    secret_key = _get(SECRET_KEY_VAR)
    if secret_key is None:
        problems.append(f"{SECRET_KEY_VAR} is not set")

    validity_seconds = _seconds(VALIDITY_VAR, DEFAULT_VALIDITY_SECONDS)
    leeway_seconds = _seconds(LEEWAY_VAR, 0)

    key_encoding = KeyEncoding.RAW
    raw_encoding = _get(KEY_ENCODING_VAR)
    if raw_encoding is not None:
        try:
            key_encoding = KeyEncoding.parse(raw_encoding)
        except ValueError as exc:
            problems.append(f"{KEY_ENCODING_VAR}: {exc}")

    if problems:
        raise SettingsError(f"Invalid token settings: {'; '.join(problems)}")

    try:
        return TokenSettings(
            secret_key=secret_key,
            algorithm=_get(ALGORITHM_VAR) or DEFAULT_ALGORITHM,
            validity=timedelta(seconds=validity_seconds),
            allowed_algorithms=tuple(_split_csv(ALLOWED_ALGORITHMS_VAR)) or HMAC_ALGORITHMS,
            leeway_seconds=leeway_seconds,
            key_encoding=key_encoding,
        )
    except (ValueError, OverflowError) as exc:
        raise SettingsError(f"Invalid token settings: {exc}") from exc
