"""Bottom pile handling: the face-down target queue, the face-up target and the discards."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .cards import Card, card_label
from .deck import BOTTOM_PILE_SIZE
from .mechanics import matchable_cards

logger = logging.getLogger(__name__)


@dataclass
class BottomPileManager:
    """Manage the bottom queue, the current target card and the discard stack."""

    queue: List[Card] = field(default_factory=list)
    discards: List[Card] = field(default_factory=list)
    _current: Optional[Card] = None

    def initialize(self, cards: Sequence[Card], count: int = BOTTOM_PILE_SIZE) -> None:
        """Take up to ``count`` cards and turn the first one into the target."""
        actual = min(count, len(cards))
        self.queue = list(cards[:actual])
        self.discards = []
        self._current = self.queue.pop(0) if self.queue else None
        logger.debug(
            "Bottom pile initialized with %d cards, target %s",
            actual,
            card_label(self._current) if self._current else None,
        )

    @property
    def current_target(self) -> Optional[Card]:
        return self._current

    def set_current_target(self, card: Card) -> None:
        """Overwrite the target. The queue and the discard stack are left alone."""
        self._current = card

    def replace_target(self, card: Card) -> None:
        """Retire the current target to the discard stack and show ``card`` instead."""
        if self._current is not None:
            self.discards.append(self._current)
        self.set_current_target(card)

    def remaining_count(self) -> int:
        return len(self.queue)

    def can_draw_new(self) -> bool:
        return len(self.queue) > 0

    def draw_new(self) -> Optional[Card]:
        """Discard the current target and reveal the next card of the queue.

        Returns None when the queue is empty. In that case the current target
        is left where it is.
        """
        if not self.queue:
            logger.debug("Bottom queue is empty; nothing to draw")
            return None
        if self._current is not None:
            self.discards.append(self._current)
        self._current = self.queue.pop(0)
        return self._current

    def matchable_reserve_cards(self, reserve: Sequence[Card]) -> List[Card]:
        return matchable_cards(reserve, self._current)

    def discard_pile(self) -> Tuple[Card, ...]:
        return tuple(self.discards)

    def used_count(self) -> int:
        return len(self.discards)

    def clear(self) -> None:
        self.queue = []
        self.discards = []
        self._current = None

    def restore(
        self,
        queue: Sequence[Card],
        current: Optional[Card],
        discards: Sequence[Card],
    ) -> None:
        self.queue = list(queue)
        self._current = current
        self.discards = list(discards)
