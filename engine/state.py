"""Immutable table snapshots for Off-By-One Solitaire."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .cards import Card, Visibility


class PileName(Enum):
    DRAW = "draw"
    RESERVE = "reserve"
    BOTTOM_QUEUE = "bottom_queue"
    TARGET = "target"
    DISCARD = "discard"

    def __str__(self) -> str:
        return self.value


# Which way up the cards of each pile lie.
PILE_VISIBILITY: dict[PileName, Visibility] = {
    PileName.DRAW: Visibility.HIDDEN,
    PileName.RESERVE: Visibility.REVEALED,
    PileName.BOTTOM_QUEUE: Visibility.HIDDEN,
    PileName.TARGET: Visibility.REVEALED,
    PileName.DISCARD: Visibility.REVEALED,
}


@dataclass(frozen=True)
class TableSnapshot:
    """Frozen copy of every pile, taken before a command mutates the table."""

    draw_pile: Tuple[Card, ...] = ()
    reserve: Tuple[Card, ...] = ()
    bottom_queue: Tuple[Card, ...] = ()
    current_target: Optional[Card] = None
    discards: Tuple[Card, ...] = ()

    def piles(self) -> Iterator[Tuple[PileName, Tuple[Card, ...]]]:
        yield PileName.DRAW, self.draw_pile
        yield PileName.RESERVE, self.reserve
        yield PileName.BOTTOM_QUEUE, self.bottom_queue
        yield PileName.TARGET, (self.current_target,) if self.current_target is not None else ()
        yield PileName.DISCARD, self.discards

    def all_cards(self) -> list[Card]:
        cards: list[Card] = []
        for _, pile in self.piles():
            cards.extend(pile)
        return cards

    def locate(self, card: Card) -> Optional[PileName]:
        for name, pile in self.piles():
            if card in pile:
                return name
        return None
