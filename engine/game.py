"""High-level game orchestration for Off-By-One Solitaire."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import List, Optional, Sequence

from .bottom import BottomPileManager
from .cards import Card, Visibility, can_match, card_label
from .deck import deal_layout
from .history import OperationHistory, OperationKind, OperationRecord
from .rules_schema import RuleSet
from .state import PILE_VISIBILITY, PileName, TableSnapshot

logger = logging.getLogger(__name__)


class CommandError(str, Enum):
    NOT_IN_RESERVE = "not_in_reserve"
    NO_TARGET = "no_target"
    NO_MATCH = "no_match"
    BOTTOM_PILE_EMPTY = "bottom_pile_empty"
    NO_HISTORY = "no_history"

    def __str__(self) -> str:
        return self.value


class GameStatus(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    STUCK = auto()


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a player command. Rejections are values, not exceptions."""

    ok: bool
    error: Optional[CommandError] = None
    card: Optional[Card] = None
    message: str = ""


@dataclass
class GameSession:
    """Own every pile of one table and apply player commands to it.

    Commands validate first and mutate second, so a rejected command leaves
    the table untouched.
    """

    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=RuleSet)
    rng: Random = field(init=False)
    draw_pile: List[Card] = field(init=False, default_factory=list)
    reserve: List[Card] = field(init=False, default_factory=list)
    bottom: BottomPileManager = field(init=False, default_factory=BottomPileManager)
    history: OperationHistory = field(init=False)
    games_started: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)
        self.history = OperationHistory(limit=self.rules.history_limit)

    # Session lifecycle -------------------------------------------------

    def clear(self) -> None:
        self.draw_pile = []
        self.reserve = []
        self.bottom.clear()
        self.history.clear()

    def new_game(self, deck: Optional[Sequence[Card]] = None) -> None:
        """Deal a fresh table. ``deck`` fixes the card order instead of shuffling."""
        self.clear()
        bottom_cards, reserve_cards, draw_cards = deal_layout(
            rng=self.rng,
            deck=deck,
            bottom_size=self.rules.bottom_pile_size,
            reserve_size=self.rules.reserve_size,
        )
        self.bottom.initialize(bottom_cards, self.rules.bottom_pile_size)
        self.reserve = list(reserve_cards)
        self.draw_pile = list(draw_cards)
        self.games_started += 1
        logger.info(
            "New game #%d: draw=%d reserve=%d bottom=%d target=%s",
            self.games_started,
            len(self.draw_pile),
            len(self.reserve),
            self.bottom.remaining_count(),
            self._label(self.bottom.current_target),
        )

    def restart(self) -> CommandResult:
        self.new_game()
        return CommandResult(ok=True, card=self.bottom.current_target, message="Game restarted.")

    # Reserve refill ----------------------------------------------------

    def draw_one_to_reserve(self) -> bool:
        if not self.draw_pile:
            return False
        card = self.draw_pile.pop(0)
        self.reserve.append(card)
        logger.debug("Drew %s into the reserve", card_label(card))
        return True

    def auto_fill_reserve(self) -> List[Card]:
        """Top the reserve up from the draw pile; stops quietly once it runs dry."""
        drawn: List[Card] = []
        while len(self.reserve) < self.rules.reserve_size and self.draw_pile:
            self.draw_one_to_reserve()
            drawn.append(self.reserve[-1])
        return drawn

    # Commands ----------------------------------------------------------

    def play_reserve_card(self, card: Card) -> CommandResult:
        if card not in self.reserve:
            return self._reject(CommandError.NOT_IN_RESERVE, "That card is not in the reserve.", card)
        target = self.bottom.current_target
        if target is None:
            return self._reject(CommandError.NO_TARGET, "There is no target card.", card)
        if not can_match(card, target):
            return self._reject(
                CommandError.NO_MATCH,
                f"Cannot match: rank must differ from {int(target.rank)} by one.",
                card,
            )

        self.history.record(
            OperationRecord(
                kind=OperationKind.REPLACE_TARGET,
                moved_card=card,
                source_pile=PileName.RESERVE,
                prior_target=target,
                before=self.snapshot(),
            )
        )
        self.reserve.remove(card)
        refilled = self.auto_fill_reserve()
        self.bottom.replace_target(card)
        logger.debug(
            "Played %s onto %s; refilled %d",
            card_label(card),
            card_label(target),
            len(refilled),
        )
        return CommandResult(ok=True, card=card, message=f"{card_label(card)} is the new target.")

    def draw_new_target(self) -> CommandResult:
        if not self.bottom.can_draw_new():
            return self._reject(CommandError.BOTTOM_PILE_EMPTY, "The bottom pile is empty.")

        prior = self.bottom.current_target
        self.history.record(
            OperationRecord(
                kind=OperationKind.DRAW_NEW_TARGET,
                moved_card=prior,
                source_pile=PileName.BOTTOM_QUEUE,
                prior_target=prior,
                before=self.snapshot(),
            )
        )
        drawn = self.bottom.draw_new()
        logger.debug("Drew new target %s (%d left)", self._label(drawn), self.bottom.remaining_count())
        return CommandResult(ok=True, card=drawn, message=f"New target: {self._label(drawn)}.")

    def undo(self) -> CommandResult:
        if not self.history.can_undo():
            return self._reject(CommandError.NO_HISTORY, "Nothing to undo.")
        record = self.history.pop()
        assert record is not None
        self._restore(record.before)
        logger.debug("Undid %s of %s", record.kind, self._label(record.moved_card))
        return CommandResult(ok=True, card=record.moved_card, message=f"Undid {self._label(record.moved_card)}.")

    # Queries -----------------------------------------------------------

    @property
    def current_target(self) -> Optional[Card]:
        return self.bottom.current_target

    def matchable_reserve_cards(self) -> List[Card]:
        return self.bottom.matchable_reserve_cards(self.reserve)

    def history_depth(self) -> int:
        return len(self.history)

    def status(self) -> GameStatus:
        if self.bottom.current_target is None:
            return GameStatus.NOT_STARTED
        if not self.draw_pile and not self.reserve and not self.bottom.can_draw_new():
            return GameStatus.WON
        if not self.bottom.can_draw_new() and not self.matchable_reserve_cards():
            return GameStatus.STUCK
        return GameStatus.IN_PROGRESS

    def snapshot(self) -> TableSnapshot:
        return TableSnapshot(
            draw_pile=tuple(self.draw_pile),
            reserve=tuple(self.reserve),
            bottom_queue=tuple(self.bottom.queue),
            current_target=self.bottom.current_target,
            discards=self.bottom.discard_pile(),
        )

    def pile_of(self, card: Card) -> Optional[PileName]:
        return self.snapshot().locate(card)

    def visibility_of(self, card: Card) -> Optional[Visibility]:
        pile = self.pile_of(card)
        return PILE_VISIBILITY[pile] if pile is not None else None

    # Helpers -----------------------------------------------------------

    def _restore(self, snapshot: TableSnapshot) -> None:
        self.draw_pile = list(snapshot.draw_pile)
        self.reserve = list(snapshot.reserve)
        self.bottom.restore(snapshot.bottom_queue, snapshot.current_target, snapshot.discards)

    def _reject(self, error: CommandError, message: str, card: Optional[Card] = None) -> CommandResult:
        logger.debug("Rejected command (%s): %s", error, message)
        return CommandResult(ok=False, error=error, card=card, message=message)

    @staticmethod
    def _label(card: Optional[Card]) -> str:
        return card_label(card) if card is not None else "none"
