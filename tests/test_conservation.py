import random

import pytest

from bots.bot_arena import apply_action
from bots.random_bot import RandomBot
from engine.cards import Visibility
from engine.deck import build_deck
from engine.encode import encode_pile_binary
from engine.game import GameSession, GameStatus
from engine.state import PILE_VISIBILITY


def assert_table_is_whole(session):
    snapshot = session.snapshot()
    cards = snapshot.all_cards()
    assert len(cards) == 52
    assert set(cards) == set(build_deck())

    occupancy = [0] * 52
    for _, pile in snapshot.piles():
        for index, flag in enumerate(encode_pile_binary(pile)):
            occupancy[index] += flag
    assert occupancy == [1] * 52

    for name, pile in snapshot.piles():
        for card in pile:
            assert session.visibility_of(card) is PILE_VISIBILITY[name]
    assert all(session.visibility_of(card) is Visibility.HIDDEN for card in session.draw_pile)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_random_command_sequences_conserve_the_deck(seed):
    session = GameSession(seed=seed)
    session.new_game()
    bot = RandomBot(seed=seed, undo_rate=0.25)
    noise = random.Random(seed)

    for _ in range(300):
        if session.status() is not GameStatus.IN_PROGRESS:
            session.new_game()
        action = bot.choose_action(session)
        if action is None:
            session.new_game()
            continue
        assert apply_action(session, action).ok
        assert_table_is_whole(session)

        # Illegal commands must leave the table exactly as it was.
        before = session.snapshot()
        stray = noise.choice(build_deck())
        if stray not in session.matchable_reserve_cards():
            assert not session.play_reserve_card(stray).ok
            assert session.snapshot() == before


def test_undo_everything_restores_the_deal():
    session = GameSession(seed=77)
    session.new_game()
    dealt = session.snapshot()
    bot = RandomBot(seed=77)

    moves = 0
    while moves < session.history.limit:
        action = bot.choose_action(session)
        if action is None:
            break
        assert apply_action(session, action).ok
        moves += 1

    while session.history.can_undo():
        assert session.undo().ok
    assert session.snapshot() == dealt
