"""Conversion between text and letter values (``A=1 .. Z=26``)."""
from __future__ import annotations

import string
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

ALPHABET = string.ascii_uppercase
_LETTER_VALUES = {ch: index + 1 for index, ch in enumerate(ALPHABET)}


class TextCodec(ABC):
    """Strategy for turning text into letter values and back."""

    @abstractmethod
    def encode(self, text: str) -> list[int]:
        ...

    @abstractmethod
    def decode(self, values: Iterable[int]) -> str:
        ...

    @abstractmethod
    def chunk(self, values: Sequence[int], width: int = 5) -> list[list[int]]:
        ...

    def group(self, values: Sequence[int], width: int = 5, separator: str = " ") -> str:
        """Render *values* as padded fixed-width letter groups."""

        return separator.join(self.decode(block) for block in self.chunk(values, width))


class LatinCodec(TextCodec):
    """The 26-letter Latin alphabet with fixed-letter padding."""

    def __init__(self, padding: str = "X") -> None:
        padding = padding.upper()
        if padding not in _LETTER_VALUES:
            raise ValueError(f"Padding must be a single Latin letter, got {padding!r}")
        self.padding = padding
        self.padding_value = _LETTER_VALUES[padding]

    def encode(self, text: str) -> list[int]:
        """Keep ASCII letters only, case-folded, as values in ``1..26``."""

        return [_LETTER_VALUES[ch.upper()] for ch in text if ch in string.ascii_letters]

    def decode(self, values: Iterable[int]) -> str:
        return "".join(ALPHABET[value - 1] for value in values)

    def chunk(self, values: Sequence[int], width: int = 5) -> list[list[int]]:
        """Split *values* into blocks of *width*, padding the final block.

        The padding is not removed again on decryption; messages whose length
        is not a multiple of *width* come back with trailing padding letters.
        """

        if width < 1:
            raise ValueError("width must be at least 1")
        values = list(values)
        blocks = [values[start:start + width] for start in range(0, len(values), width)]
        if blocks and len(blocks[-1]) < width:
            blocks[-1].extend([self.padding_value] * (width - len(blocks[-1])))
        return blocks

    def __repr__(self) -> str:
        return f"LatinCodec(padding={self.padding!r})"


def encode(text: str) -> list[int]:
    return LatinCodec().encode(text)


def decode(values: Iterable[int]) -> str:
    return LatinCodec().decode(values)


def chunk(values: Sequence[int], width: int = 5) -> list[list[int]]:
    return LatinCodec().chunk(values, width)


__all__ = [
    "ALPHABET",
    "TextCodec",
    "LatinCodec",
    "encode",
    "decode",
    "chunk",
]
