# src/jwtutils/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple, Union

from .constants import TimeUnit

# Everything `Validity.of` understands.
ValidityLike = Union["Validity", timedelta, Tuple[Union[int, float], Union[TimeUnit, str]], int]


@dataclass(frozen=True, slots=True)
class Validity:
    """
    How long a token stays valid after it is issued, in whole milliseconds.

    Zero and negative values are allowed: they describe a token that is
    already expired when issued.
    """
    millis: int

    def __post_init__(self) -> None:
        if isinstance(self.millis, bool) or not isinstance(self.millis, int):
            raise TypeError(f"Validity millis must be an int, got {type(self.millis).__name__}")

    @classmethod
    def from_duration(cls, duration: timedelta) -> "Validity":
        return cls(duration // timedelta(milliseconds=1))

    @classmethod
    def from_amount(cls, amount: int | float, unit: TimeUnit | str) -> "Validity":
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise TypeError(f"Validity amount must be a number, got {amount!r}")
        unit = TimeUnit.parse(unit)
        try:
            return cls(unit.to_millis(amount))
        except (OverflowError, ValueError) as exc:
            raise ValueError(f"Validity out of range: {amount!r} {unit.name.lower()}") from exc

    @classmethod
    def of(cls, value: ValidityLike) -> "Validity":
        """
        Normalize any accepted validity form.

        - Validity                 -> itself
        - timedelta                -> its length
        - (amount, unit) pair      -> amount * unit
        - int                      -> milliseconds
        """
        if isinstance(value, Validity):
            return value
        if isinstance(value, timedelta):
            return cls.from_duration(value)
        if isinstance(value, tuple):
            if len(value) != 2:
                raise ValueError(f"Expected an (amount, unit) pair, got {value!r}")
            amount, unit = value
            return cls.from_amount(amount, unit)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise TypeError(f"Unsupported validity: {value!r}")

    @property
    def duration(self) -> timedelta:
        try:
            return timedelta(milliseconds=self.millis)
        except OverflowError as exc:
            raise ValueError(f"Validity out of range: {self}") from exc

    def __str__(self) -> str:
        return f"{self.millis}ms"
