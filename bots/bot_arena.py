"""Simple bot arena for Off-By-One Solitaire."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Optional

from engine.game import CommandResult, GameSession, GameStatus

from .base import ActionType, BotAction, BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}

MAX_MOVES = 500


def apply_action(session: GameSession, action: BotAction) -> CommandResult:
    if action.action_type == ActionType.PLAY_RESERVE:
        if action.card is None:
            raise ValueError("Play action is missing its card.")
        return session.play_reserve_card(action.card)
    if action.action_type == ActionType.DRAW_TARGET:
        return session.draw_new_target()
    if action.action_type == ActionType.UNDO:
        return session.undo()
    raise ValueError(f"Unknown action type: {action.action_type}")


def play_game(session: GameSession, bot: BotStrategy, *, max_moves: int = MAX_MOVES) -> dict:
    """Play one dealt game until the bot gives up, the game ends or the move cap is hit."""
    bot.on_game_start(session)
    moves = 0
    rejected = 0
    while moves < max_moves and session.status() == GameStatus.IN_PROGRESS:
        action = bot.choose_action(session)
        if action is None:
            break
        result = apply_action(session, action)
        moves += 1
        if not result.ok:
            rejected += 1
    return {
        "status": session.status().name.lower(),
        "moves": moves,
        "rejected": rejected,
        "cards_left": len(session.draw_pile) + len(session.reserve) + session.bottom.remaining_count(),
    }


def run_games(bot: BotStrategy, *, n_games: int = 10, seed: Optional[int] = None) -> dict:
    session = GameSession(seed=seed)
    history = []
    for _ in range(n_games):
        session.new_game()
        history.append(play_game(session, bot))
    won = sum(1 for entry in history if entry["status"] == "won")
    stuck = sum(1 for entry in history if entry["status"] == "stuck")
    avg_moves = sum(entry["moves"] for entry in history) / n_games if n_games else 0.0
    return {"won": won, "stuck": stuck, "avg_moves": avg_moves, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a batch of solitaire games with a bot.")
    parser.add_argument("--bot", default="greedy", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=100, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true", help="Log every engine command.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    bot = BOT_REGISTRY[args.bot]()
    results = run_games(bot, n_games=args.n, seed=args.seed)

    print(f"Games played: {args.n}")
    print(f"Won: {results['won']}  Stuck: {results['stuck']}")
    print(f"Average moves per game: {results['avg_moves']:.2f}")


if __name__ == "__main__":
    main()
