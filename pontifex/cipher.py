"""Modular addition cipher over letter values and keystream values."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from pontifex.deck import PontifexError
from pontifex.keystream import ALPHABET_SIZE, KeystreamGenerator
from pontifex.profile import STANDARD, CipherProfile
from pontifex.textcodec import TextCodec

LOGGER = logging.getLogger("pontifex.cipher")


class InsufficientKeystream(PontifexError, ValueError):
    """Raised when fewer keystream values than text values are supplied."""


def _check_lengths(text: Sequence[int], keystream: Sequence[int]) -> None:
    if len(keystream) < len(text):
        raise InsufficientKeystream(
            f"Need {len(text)} keystream values, got {len(keystream)}"
        )


def encrypt(plaintext_values: Sequence[int], keystream_values: Sequence[int]) -> list[int]:
    """Add the keystream to the plaintext, wrapping into ``1..26``."""

    _check_lengths(plaintext_values, keystream_values)
    return [
        (p + k - 1) % ALPHABET_SIZE + 1
        for p, k in zip(plaintext_values, keystream_values)
    ]


def decrypt(ciphertext_values: Sequence[int], keystream_values: Sequence[int]) -> list[int]:
    """Subtract the keystream from the ciphertext, wrapping into ``1..26``."""

    _check_lengths(ciphertext_values, keystream_values)
    return [
        (c - k + ALPHABET_SIZE - 1) % ALPHABET_SIZE + 1
        for c, k in zip(ciphertext_values, keystream_values)
    ]


def _session(
    cards: Iterable[int] | None,
    passphrase: str | None,
    profile: CipherProfile,
    codec: TextCodec,
) -> KeystreamGenerator:
    passphrase_values = codec.encode(passphrase) if passphrase else None
    return KeystreamGenerator.from_profile(profile, cards, passphrase_values)


def encrypt_message(
    cards: Iterable[int] | None,
    message: str,
    passphrase: str | None = None,
    profile: CipherProfile | Mapping[str, Any] = STANDARD,
    codec: TextCodec | None = None,
) -> str:
    """Encrypt *message* and return it as padded letter groups.

    *cards* is the initial deck order (``None`` for the unkeyed deck).  Only
    Latin letters of *message* are enciphered.  *profile* may also be a
    mapping of settings, e.g. one loaded from a JSON file.
    """

    profile = CipherProfile.resolve(profile)
    codec = codec or profile.codec()
    blocks = codec.chunk(codec.encode(message), profile.group_width)
    plaintext = [value for block in blocks for value in block]
    generator = _session(cards, passphrase, profile, codec)
    ciphertext = encrypt(plaintext, generator.take(len(plaintext)))
    LOGGER.debug("encrypted %d letters in %d rounds", len(plaintext), generator.rounds)
    return codec.group(ciphertext, profile.group_width)


def decrypt_message(
    cards: Iterable[int] | None,
    message: str,
    passphrase: str | None = None,
    profile: CipherProfile | Mapping[str, Any] = STANDARD,
    codec: TextCodec | None = None,
) -> str:
    """Decrypt grouped or ungrouped ciphertext, keeping any padding letters."""

    profile = CipherProfile.resolve(profile)
    codec = codec or profile.codec()
    ciphertext = codec.encode(message)
    generator = _session(cards, passphrase, profile, codec)
    plaintext = decrypt(ciphertext, generator.take(len(ciphertext)))
    LOGGER.debug("decrypted %d letters in %d rounds", len(ciphertext), generator.rounds)
    return codec.decode(plaintext)


__all__ = [
    "InsufficientKeystream",
    "encrypt",
    "decrypt",
    "encrypt_message",
    "decrypt_message",
]
