"""Stable card ids and pile encodings."""

from __future__ import annotations

from typing import Iterable, List

from .cards import SUIT_ORDER, Card, InvalidCardPayload, Rank
from .deck import DECK_SIZE

SUIT_INDEX = {suit: index for index, suit in enumerate(SUIT_ORDER)}
RANKS_PER_SUIT = len(Rank)


def encode_card(card: Card) -> int:
    """Encode a card as a single index from 0..51, in the unshuffled deck order."""
    return SUIT_INDEX[card.suit] * RANKS_PER_SUIT + int(card.rank) - 1


def decode_card(card_id: int) -> Card:
    if isinstance(card_id, bool) or not isinstance(card_id, int) or not 0 <= card_id < DECK_SIZE:
        raise InvalidCardPayload(f"Card id must be between 0 and {DECK_SIZE - 1}, got {card_id!r}.")
    suit_index, rank_offset = divmod(card_id, RANKS_PER_SUIT)
    return Card(Rank(rank_offset + 1), SUIT_ORDER[suit_index])


def encode_pile_binary(cards: Iterable[Card]) -> List[int]:
    """Return a fixed-length binary vector marking which cards are in the pile."""
    vector = [0] * DECK_SIZE
    for card in cards:
        vector[encode_card(card)] = 1
    return vector
