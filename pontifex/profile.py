"""Configuration profiles for the Solitaire cipher."""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from pontifex.deck import MIN_SIZE, STANDARD_SIZE
from pontifex.textcodec import LatinCodec


def _coerce_positive_int(name: str, value: Any, minimum: int = 1) -> int:
    """Convert *value* into an integer no smaller than *minimum*.

    Profiles are frequently loaded from JSON or user supplied settings, so
    integral floats and numeric strings are accepted.  ``TypeError`` flags
    unsupported data types while ``ValueError`` reports values that are
    recognised but out of range.
    """

    if isinstance(value, bool):
        raise TypeError(f"Boolean values are not valid for {name}")
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            raise ValueError(f"{name} must be a whole number, got {value!r}")
        value = int(value)
    elif isinstance(value, str):
        token = value.strip()
        try:
            value = int(token, 10)
        except ValueError as exc:
            raise ValueError(f"Unknown {name} value: {token!r}") from exc
    elif not isinstance(value, int):
        raise TypeError(f"Unsupported {name} type: {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def _normalise_padding(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Unsupported padding type: {type(value).__name__}")
    token = value.strip().upper()
    if len(token) != 1 or not ("A" <= token <= "Z"):
        raise ValueError(f"Padding must be a single Latin letter, got {value!r}")
    return token


@dataclass(frozen=True)
class CipherProfile:
    """Deck size and output grouping used by a cipher session."""

    deck_size: int = STANDARD_SIZE
    group_width: int = 5
    padding: str = "X"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalise the fields in place, raising on invalid values."""

        object.__setattr__(
            self, "deck_size", _coerce_positive_int("deck_size", self.deck_size, MIN_SIZE)
        )
        object.__setattr__(
            self, "group_width", _coerce_positive_int("group_width", self.group_width)
        )
        object.__setattr__(self, "padding", _normalise_padding(self.padding))

    def codec(self) -> LatinCodec:
        return LatinCodec(padding=self.padding)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CipherProfile":
        """Create a profile from settings in *data*, ignoring unknown keys."""
        names = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})

    @classmethod
    def resolve(cls, value: "CipherProfile | Mapping[str, Any] | None") -> "CipherProfile":
        """Return *value* as a profile; mappings are loaded, ``None`` is the default."""

        if value is None:
            return STANDARD
        if isinstance(value, CipherProfile):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise TypeError(f"Unsupported profile type: {type(value).__name__}")


STANDARD = CipherProfile()

TOY = CipherProfile(deck_size=10)

__all__ = [
    "CipherProfile",
    "STANDARD",
    "TOY",
]
