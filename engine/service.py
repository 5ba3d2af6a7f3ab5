"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .cards import Card, Visibility, card_label, deserialize_card, serialize_card
from .encode import decode_card, encode_card
from .game import CommandResult, GameSession
from .rules_schema import RuleSet
from .state import PILE_VISIBILITY, PileName


@dataclass
class CardView:
    id: int
    card: dict
    label: str
    face_up: bool


@dataclass
class GameView:
    status: str
    draw_pile_count: int
    reserve: list[CardView]
    current_target: Optional[CardView]
    bottom_pile_count: int
    discard_count: int
    matchable: list[CardView]
    matchable_count: int
    history_depth: int
    can_draw_new: bool
    can_undo: bool


@dataclass
class CommandOutcome:
    ok: bool
    error: Optional[str]
    message: str
    view: GameView


class GameService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    # Session lifecycle -------------------------------------------------

    def start_new_game(self, seed: Optional[int] = None, rules: Optional[RuleSet] = None) -> GameView:
        if seed is not None or rules is not None:
            self.session = GameSession(seed=seed, rules=rules or self.session.rules)
        self.session.new_game()
        return self.get_view()

    def has_started(self) -> bool:
        return self.session.current_target is not None

    # Actions -----------------------------------------------------------

    def play_reserve_card(self, card_payload: Mapping[str, object]) -> CommandOutcome:
        return self._outcome(self.session.play_reserve_card(deserialize_card(card_payload)))

    def play_reserve_card_id(self, card_id: int) -> CommandOutcome:
        return self._outcome(self.session.play_reserve_card(decode_card(card_id)))

    def draw_new_target(self) -> CommandOutcome:
        return self._outcome(self.session.draw_new_target())

    def undo(self) -> CommandOutcome:
        return self._outcome(self.session.undo())

    def restart(self) -> CommandOutcome:
        return self._outcome(self.session.restart())

    # Views -------------------------------------------------------------

    def get_view(self) -> GameView:
        session = self.session
        target = session.current_target
        matchable = session.matchable_reserve_cards()
        return GameView(
            status=session.status().name.lower(),
            draw_pile_count=len(session.draw_pile),
            reserve=[self._card_view(card, PileName.RESERVE) for card in session.reserve],
            current_target=self._card_view(target, PileName.TARGET) if target is not None else None,
            bottom_pile_count=session.bottom.remaining_count(),
            discard_count=session.bottom.used_count(),
            matchable=[self._card_view(card, PileName.RESERVE) for card in matchable],
            matchable_count=len(matchable),
            history_depth=session.history_depth(),
            can_draw_new=session.bottom.can_draw_new(),
            can_undo=session.history.can_undo(),
        )

    # Helpers -----------------------------------------------------------

    def _card_view(self, card: Card, pile: PileName) -> CardView:
        return CardView(
            id=encode_card(card),
            card=serialize_card(card),
            label=card_label(card),
            face_up=PILE_VISIBILITY[pile] is Visibility.REVEALED,
        )

    def _outcome(self, result: CommandResult) -> CommandOutcome:
        return CommandOutcome(
            ok=result.ok,
            error=result.error.value if result.error is not None else None,
            message=result.message,
            view=self.get_view(),
        )
