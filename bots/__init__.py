"""Bot strategies for Off-By-One Solitaire."""

from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

__all__ = ["GreedyBot", "RandomBot"]
