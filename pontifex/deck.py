"""Deck state for the Solitaire (Pontifex) keystream generator.

A deck of ``N`` cards is a permutation of the identities ``1..N``.  The two
highest identities are the jokers (``N - 1`` is joker A, ``N`` is joker B);
everything below them is a ranked card whose identity is also its value.
Positions are 1-indexed from the top in every public method.
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator, Sequence

STANDARD_SIZE = 54
MIN_SIZE = 3

SUITS = ("C", "D", "H", "S")
RANK_LABELS = {
    1: "A",
    11: "J",
    12: "Q",
    13: "K",
}
_RANK_VALUES = {RANK_LABELS.get(rank, str(rank)): rank for rank in range(1, 14)}
_LABEL_SEPARATORS = re.compile(r"[\s,]+")


class PontifexError(Exception):
    """Base class for every error raised by the cipher core."""


class InvariantViolation(PontifexError):
    """Raised when the deck no longer satisfies its permutation invariant."""


class MalformedPermutation(PontifexError, ValueError):
    """Raised when a deck is built from something that is not a permutation."""


def card_label(identity: int, size: int = STANDARD_SIZE) -> str:
    """Return a human readable label such as ``"10D"`` or ``"JA"`` for *identity*."""

    if identity == size - 1:
        return "JA"
    if identity == size:
        return "JB"
    suit_index, rank = divmod(identity - 1, 13)
    rank += 1
    return f"{RANK_LABELS.get(rank, str(rank))}{SUITS[suit_index % len(SUITS)]}"


def parse_label(label: str, size: int = STANDARD_SIZE) -> int:
    """Return the identity for *label*, the inverse of :func:`card_label`."""

    token = label.strip().upper()
    if token == "JA":
        return size - 1
    if token == "JB":
        return size
    rank_token, suit = token[:-1], token[-1:]
    if suit not in SUITS:
        raise MalformedPermutation(f"Unknown card label: {label!r}")
    rank = _RANK_VALUES.get(rank_token)
    if rank is None:
        raise MalformedPermutation(f"Unknown card label: {label!r}")
    return SUITS.index(suit) * 13 + rank


def _check_permutation(cards: Sequence[int]) -> None:
    size = len(cards)
    if size < MIN_SIZE:
        raise MalformedPermutation(
            f"A deck needs at least {MIN_SIZE} cards, got {size}"
        )
    for card in cards:
        if isinstance(card, bool) or not isinstance(card, int):
            raise MalformedPermutation(f"Card identities must be integers, got {card!r}")

    expected = set(range(1, size + 1))
    seen: set[int] = set()
    duplicates: set[int] = set()
    for card in cards:
        if card in seen:
            duplicates.add(card)
        seen.add(card)
    problems: list[str] = []
    if duplicates:
        problems.append("duplicated " + ", ".join(str(c) for c in sorted(duplicates)))
    missing = expected - seen
    if missing:
        problems.append("missing " + ", ".join(str(c) for c in sorted(missing)))
    unexpected = seen - expected
    if unexpected:
        problems.append("out of range " + ", ".join(str(c) for c in sorted(unexpected)))
    if problems:
        raise MalformedPermutation(
            f"Not a permutation of 1..{size}: " + "; ".join(problems)
        )


class Deck:
    """Mutable ordered deck with the positional operations of the cipher."""

    def __init__(self, cards: Iterable[int]) -> None:
        cards = list(cards)
        _check_permutation(cards)
        self._cards: list[int] = cards

    @classmethod
    def unkeyed(cls, size: int = STANDARD_SIZE) -> "Deck":
        """Return the sorted deck ``[1, 2, ..., size]``."""

        return cls(range(1, size + 1))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return len(self._cards)

    @property
    def joker_a(self) -> int:
        return self.size - 1

    @property
    def joker_b(self) -> int:
        return self.size

    @property
    def cards(self) -> tuple[int, ...]:
        """Snapshot of the current order, top card first."""

        return tuple(self._cards)

    def is_joker(self, identity: int) -> bool:
        return identity >= self.joker_a

    def copy(self) -> "Deck":
        return Deck(self._cards)

    @classmethod
    def from_labels(cls, labels: str | Iterable[str]) -> "Deck":
        """Build a deck from card labels such as ``"AC 10D JA ... JB"``.

        A single string is split on whitespace and commas.  The deck size is
        the number of labels, which fixes the joker identities.
        """

        if isinstance(labels, str):
            labels = _LABEL_SEPARATORS.split(labels.strip())
        tokens = [label.strip().upper() for label in labels if label.strip()]
        return cls(parse_label(token, len(tokens)) for token in tokens)

    def labels(self) -> list[str]:
        return [card_label(card, self.size) for card in self._cards]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._cards))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Deck({self._cards!r})"

    # ------------------------------------------------------------------
    # Positional primitives
    # ------------------------------------------------------------------
    def _check_position(self, position: int) -> None:
        if not 1 <= position <= self.size:
            raise ValueError(f"Position {position} outside 1..{self.size}")

    def _value(self, identity: int) -> int:
        # Both jokers count as the lower joker.
        return self.joker_a if self.is_joker(identity) else identity

    def locate(self, identity: int) -> int:
        """Return the 1-indexed position of *identity*."""

        try:
            return self._cards.index(identity) + 1
        except ValueError:
            raise InvariantViolation(
                f"Card {identity} is not in the deck; the permutation is corrupted"
            ) from None

    def value_at(self, position: int) -> int:
        self._check_position(position)
        return self._value(self._cards[position - 1])

    def peek_top_value(self) -> int:
        return self._value(self._cards[0])

    def move_down_cyclic(self, position: int, distance: int) -> None:
        """Move the card at *position* down by *distance* slots.

        The deck wraps around as a circle that excludes the top slot: a card
        pushed past the bottom re-enters just below the top card.
        """

        self._check_position(position)
        if distance < 0:
            raise ValueError("distance must be non-negative")
        if distance == 0:
            return
        size = self.size
        card = self._cards.pop(position - 1)
        target = (position - 1 + distance - 1) % (size - 1) + 1
        self._cards.insert(target, card)

    def triple_cut(self) -> None:
        """Swap the cards above the first joker with those below the second."""

        first = self.locate(self.joker_a) - 1
        second = self.locate(self.joker_b) - 1
        if first > second:
            first, second = second, first
        cards = self._cards
        self._cards = cards[second + 1:] + cards[first:second + 1] + cards[:first]

    def count_cut_with(self, value: int) -> None:
        """Move *value* cards from the top to just above the bottom card.

        The cut rotates the cards above the bottom one, so counts wrap modulo
        ``size - 1``.
        """

        if value < 0:
            raise ValueError("count must be non-negative")
        value %= self.size - 1
        cards = self._cards
        self._cards = cards[value:-1] + cards[:value] + cards[-1:]

    def count_cut(self) -> None:
        self.count_cut_with(self._value(self._cards[-1]))

    # ------------------------------------------------------------------
    # Round steps
    # ------------------------------------------------------------------
    def advance_jokers(self) -> None:
        """Move joker A down one slot, then joker B down two."""

        self.move_down_cyclic(self.locate(self.joker_a), 1)
        self.move_down_cyclic(self.locate(self.joker_b), 2)

    def output_card(self) -> int | None:
        """Return the raw output for the current order, or ``None`` on a joker."""

        card = self._cards[self.peek_top_value()]
        if self.is_joker(card):
            return None
        return card


__all__ = [
    "STANDARD_SIZE",
    "PontifexError",
    "InvariantViolation",
    "MalformedPermutation",
    "Deck",
    "card_label",
    "parse_label",
]
