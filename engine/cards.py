"""Card-related data structures and helpers for Off-By-One Solitaire."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Mapping, Union


class InvalidCardPayload(ValueError):
    """Raised when a card description coming from a client cannot be decoded."""


class Suit(Enum):
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.name.lower()


class Visibility(Enum):
    HIDDEN = auto()
    REVEALED = auto()


SUIT_ORDER: list[Suit] = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

# Face cards and the ace are shown by letter, everything else by number.
RANK_LABELS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}


@dataclass(frozen=True)
class Card:
    """Immutable playing card identity.

    Face-up/face-down state is not stored on the card; it follows from the
    pile the card currently sits in.
    """

    rank: Rank
    suit: Suit

    def can_match(self, other: "Card") -> bool:
        return can_match(self, other)

    def display_name(self) -> str:
        return card_label(self)


def can_match(first: Card, second: Card) -> bool:
    """Return True if the ranks differ by exactly one. Kings do not wrap to aces."""
    return abs(int(first.rank) - int(second.rank)) == 1


def card_label(card: Card) -> str:
    rank_text = RANK_LABELS.get(card.rank, str(int(card.rank)))
    return f"{SUIT_SYMBOLS[card.suit]} {rank_text}"


def serialize_card(card: Card) -> dict[str, Union[int, str]]:
    return {"rank": int(card.rank), "suit": card.suit.name.lower()}


def _parse_rank(value: object) -> Rank:
    if isinstance(value, bool):
        raise InvalidCardPayload(f"Unknown rank: {value!r}")
    if isinstance(value, int):
        try:
            return Rank(value)
        except ValueError as exc:
            raise InvalidCardPayload(f"Rank must be between 1 and 13, got {value}.") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return _parse_rank(int(text))
        for rank, label in RANK_LABELS.items():
            if text.upper() == label:
                return rank
        try:
            return Rank[text.upper()]
        except KeyError as exc:
            raise InvalidCardPayload(f"Unknown rank: {value!r}") from exc
    raise InvalidCardPayload(f"Unknown rank: {value!r}")


def _parse_suit(value: object) -> Suit:
    if not isinstance(value, str):
        raise InvalidCardPayload(f"Unknown suit: {value!r}")
    try:
        return Suit[value.strip().upper()]
    except KeyError as exc:
        raise InvalidCardPayload(f"Unknown suit: {value!r}") from exc


def deserialize_card(payload: Mapping[str, object]) -> Card:
    if "rank" not in payload or "suit" not in payload:
        raise InvalidCardPayload("Card payload needs both 'rank' and 'suit'.")
    return Card(_parse_rank(payload["rank"]), _parse_suit(payload["suit"]))
