"""Legal move generation for Off-By-One Solitaire."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, can_match


def matchable_cards(reserve: Iterable[Card], target: Optional[Card]) -> List[Card]:
    """Return the reserve cards that may replace the target, in reserve order."""
    if target is None:
        return []
    return [card for card in reserve if can_match(card, target)]


def has_legal_play(reserve: Iterable[Card], target: Optional[Card]) -> bool:
    return bool(matchable_cards(reserve, target))
