"""Baseline greedy bot."""

from __future__ import annotations

from typing import Optional, Sequence

from engine.cards import Card
from engine.game import GameSession
from engine.mechanics import matchable_cards

from .base import BotAction, BotStrategy


def _follow_up_matches(reserve: Sequence[Card], played: Card) -> int:
    """Count the reserve cards that could go on top of ``played`` next turn."""
    remaining = [card for card in reserve if card != played]
    return len(matchable_cards(remaining, played))


class GreedyBot(BotStrategy):
    """Always plays when it can, preferring the card that keeps the most matches open."""

    name = "Greedy"

    def choose_action(self, session: GameSession) -> Optional[BotAction]:
        matchable = session.matchable_reserve_cards()
        if matchable:
            best = max(matchable, key=lambda card: _follow_up_matches(session.reserve, card))
            return BotAction.play(best)
        if session.bottom.can_draw_new():
            return BotAction.draw()
        return None
