"""Random baseline bot."""

from __future__ import annotations

import random
from typing import List, Optional

from engine.game import GameSession

from .base import BotAction, BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, undo_rate: float = 0.0) -> None:
        self._rng = random.Random(seed)
        self.undo_rate = undo_rate

    def choose_action(self, session: GameSession) -> Optional[BotAction]:
        if session.history.can_undo() and self._rng.random() < self.undo_rate:
            return BotAction.undo()
        options: List[BotAction] = [BotAction.play(card) for card in session.matchable_reserve_cards()]
        if session.bottom.can_draw_new():
            options.append(BotAction.draw())
        if not options:
            return None
        return self._rng.choice(options)
