from enum import Enum

TOKEN_PREFIX = "Bearer "
AUTHORIZATION_HEADER = "authorization"

DEFAULT_ALGORITHM = "HS256"

# Symmetric algorithms: the same string key signs and verifies.
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class RegisteredClaim(str, Enum):
    SUBJECT = "sub"
    ISSUED_AT = "iat"
    EXPIRATION = "exp"


class TimeUnit(Enum):
    MILLISECONDS = 1
    SECONDS = 1_000
    MINUTES = 60_000
    HOURS = 3_600_000
    DAYS = 86_400_000

    @property
    def millis(self) -> int:
        return self.value

    def to_millis(self, amount: int | float) -> int:
        return int(amount * self.value)

    @classmethod
    def parse(cls, unit: "TimeUnit | str") -> "TimeUnit":
        """Accept a member or its case-insensitive name ("seconds", "HOURS")."""
        if isinstance(unit, cls):
            return unit
        if isinstance(unit, str):
            try:
                return cls[unit.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown time unit: {unit!r}")


class KeyEncoding(str, Enum):
    """How a secret key string becomes HMAC key bytes."""
    RAW = "raw"  # UTF-8 bytes of the string
    BASE64 = "base64"  # string is base64 of the key bytes

    @classmethod
    def parse(cls, encoding: "KeyEncoding | str") -> "KeyEncoding":
        if isinstance(encoding, cls):
            return encoding
        if isinstance(encoding, str):
            try:
                return cls(encoding.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown key encoding: {encoding!r}")
