"""Core engine package for Off-By-One Solitaire."""

__all__ = [
    "cards",
    "deck",
    "mechanics",
    "state",
    "bottom",
    "history",
    "game",
    "encode",
    "rules_schema",
    "service",
]
