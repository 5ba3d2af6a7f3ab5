"""Bounded operation history backing undo."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Tuple

from .cards import Card
from .state import PileName, TableSnapshot

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20


class OperationKind(Enum):
    REPLACE_TARGET = "replace_target"
    DRAW_NEW_TARGET = "draw_new_target"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationRecord:
    """One committed command together with the table as it was before it."""

    kind: OperationKind
    moved_card: Optional[Card]
    source_pile: PileName
    prior_target: Optional[Card]
    before: TableSnapshot


class OperationHistory:
    """Stack of operation records that forgets the oldest entry once full."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self._records: Deque[OperationRecord] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        assert self._records.maxlen is not None
        return self._records.maxlen

    def record(self, operation: OperationRecord) -> None:
        if len(self._records) == self.limit:
            logger.debug("History full (%d); dropping oldest %s", self.limit, self._records[0].kind)
        self._records.append(operation)

    def pop(self) -> Optional[OperationRecord]:
        if not self._records:
            return None
        return self._records.pop()

    def peek(self) -> Optional[OperationRecord]:
        return self._records[-1] if self._records else None

    def can_undo(self) -> bool:
        return len(self._records) > 0

    def clear(self) -> None:
        self._records.clear()

    def records(self) -> Tuple[OperationRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
