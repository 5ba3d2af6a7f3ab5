"""Common bot strategy interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from engine.cards import Card
from engine.game import GameSession


class ActionType(Enum):
    PLAY_RESERVE = auto()
    DRAW_TARGET = auto()
    UNDO = auto()


@dataclass(frozen=True)
class BotAction:
    action_type: ActionType
    card: Optional[Card] = None

    @staticmethod
    def play(card: Card) -> "BotAction":
        return BotAction(ActionType.PLAY_RESERVE, card)

    @staticmethod
    def draw() -> "BotAction":
        return BotAction(ActionType.DRAW_TARGET)

    @staticmethod
    def undo() -> "BotAction":
        return BotAction(ActionType.UNDO)


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_game_start(self, session: GameSession) -> None:
        """Optional hook invoked after a fresh deal."""
        return None

    def choose_action(self, session: GameSession) -> Optional[BotAction]:
        """Return the next command, or None when the bot has nothing to do."""
        matchable = session.matchable_reserve_cards()
        if matchable:
            return BotAction.play(matchable[0])
        if session.bottom.can_draw_new():
            return BotAction.draw()
        return None
