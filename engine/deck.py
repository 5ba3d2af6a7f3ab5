"""Deck creation utilities for Off-By-One Solitaire."""

from __future__ import annotations

from random import Random
from typing import List, MutableSequence, Optional, Sequence, Tuple

from .cards import Card, Rank, SUIT_ORDER

DECK_SIZE = 52
BOTTOM_PILE_SIZE = 5
RESERVE_SIZE = 3


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck, suit by suit, ace to king."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in Rank]


def shuffle_deck(deck: MutableSequence[Card], rng: Optional[Random] = None) -> None:
    """Shuffle the deck in place with a Fisher-Yates pass from the back."""
    if rng is None:
        rng = Random()
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]


def deal_layout(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    bottom_size: int = BOTTOM_PILE_SIZE,
    reserve_size: int = RESERVE_SIZE,
) -> Tuple[List[Card], List[Card], List[Card]]:
    """Split a deck into the bottom pile, the reserve hand and the draw pile.

    When ``deck`` is given its order is used as-is; otherwise a fresh deck is
    built and shuffled with ``rng``.
    """
    if deck is not None:
        cards = list(deck)
        if len(cards) != DECK_SIZE or len(set(cards)) != DECK_SIZE:
            raise ValueError(f"Deck must contain exactly {DECK_SIZE} distinct cards.")
    else:
        cards = build_deck()
        shuffle_deck(cards, rng)

    bottom = cards[0:bottom_size]
    reserve = cards[bottom_size : bottom_size + reserve_size]
    draw_pile = cards[bottom_size + reserve_size :]

    return bottom, reserve, draw_pile
