"""Validation schema for Off-By-One Solitaire rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .deck import BOTTOM_PILE_SIZE, DECK_SIZE, RESERVE_SIZE
from .history import HISTORY_LIMIT


class RuleSet(BaseModel):
    bottom_pile_size: int = Field(
        BOTTOM_PILE_SIZE,
        description="Cards dealt to the bottom pile; the first becomes the target.",
    )
    reserve_size: int = Field(RESERVE_SIZE, description="Reserve hand size kept topped up from the draw pile.")
    history_limit: int = Field(HISTORY_LIMIT, description="How many commands can be undone.")

    @field_validator("bottom_pile_size", "reserve_size", "history_limit")
    @classmethod
    def ensure_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Value must be at least 1.")
        return value

    @model_validator(mode="after")
    def ensure_fits_deck(self) -> "RuleSet":
        if self.bottom_pile_size + self.reserve_size > DECK_SIZE:
            raise ValueError(f"Bottom pile and reserve cannot take more than {DECK_SIZE} cards.")
        return self


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read a JSON rules file."""
    return RuleSet.model_validate_json(Path(path).read_text(encoding="utf-8"))
