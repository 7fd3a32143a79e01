"""Keystream generation by repeatedly advancing a Solitaire deck."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, Sequence

from pontifex.deck import Deck, InvariantViolation

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pontifex.profile import CipherProfile

LOGGER = logging.getLogger("pontifex.keystream")

ALPHABET_SIZE = 26
MAX_CONSECUTIVE_SKIPS = 1024


def to_letter_value(raw: int) -> int:
    """Map a raw card value onto ``1..26`` (multiples of 26 become 26)."""

    remainder = raw % ALPHABET_SIZE
    return remainder or ALPHABET_SIZE


class KeystreamGenerator:
    """Infinite iterator of keystream letter values driven by one deck.

    The generator owns *deck* and mutates it with every value produced, so a
    stream cannot be rewound.  To reproduce a keystream build a new generator
    from a copy of the original key.
    """

    def __init__(self, deck: Deck, passphrase: Sequence[int] | None = None) -> None:
        self.deck = deck
        self.rounds = 0
        self.skipped = 0
        if passphrase:
            self._key(passphrase)
        LOGGER.debug(
            "keystream generator ready: %d cards, %d keying rounds",
            deck.size,
            len(passphrase or ()),
        )

    @classmethod
    def from_profile(
        cls,
        profile: "CipherProfile",
        cards: Iterable[int] | None = None,
        passphrase: Sequence[int] | None = None,
    ) -> "KeystreamGenerator":
        """Build a generator for *profile* from *cards* or the unkeyed deck."""

        if cards is None:
            deck = Deck.unkeyed(profile.deck_size)
        else:
            deck = Deck(cards)
            if deck.size != profile.deck_size:
                raise ValueError(
                    f"Profile expects {profile.deck_size} cards, got {deck.size}"
                )
        return cls(deck, passphrase)

    def _key(self, passphrase: Sequence[int]) -> None:
        for value in passphrase:
            self.deck.advance_jokers()
            self.deck.triple_cut()
            self.deck.count_cut_with(value)

    def _round(self) -> int | None:
        self.rounds += 1
        deck = self.deck
        deck.advance_jokers()
        deck.triple_cut()
        deck.count_cut()
        return deck.output_card()

    def next_raw(self) -> int:
        """Advance the deck until it yields a card and return that card's value."""

        for _ in range(MAX_CONSECUTIVE_SKIPS):
            raw = self._round()
            if raw is not None:
                return raw
            self.skipped += 1
            LOGGER.debug("joker output at round %d, skipping", self.rounds)
        raise InvariantViolation(
            f"No output after {MAX_CONSECUTIVE_SKIPS} consecutive rounds"
        )

    def next(self) -> int:
        return to_letter_value(self.next_raw())

    def take(self, count: int) -> list[int]:
        """Return the next *count* keystream values."""

        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.next() for _ in range(count)]

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next()

    def __repr__(self) -> str:
        return f"<KeystreamGenerator cards={self.deck.size} rounds={self.rounds}>"


__all__ = [
    "KeystreamGenerator",
    "MAX_CONSECUTIVE_SKIPS",
    "to_letter_value",
]
