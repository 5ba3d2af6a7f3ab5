import pytest

from engine.cards import Card, InvalidCardPayload, Rank, Suit
from engine.deck import build_deck
from engine.encode import encode_card
from engine.game import GameSession
from engine.service import GameService


def scenario_service():
    front = [
        Card(Rank.EIGHT, Suit.SPADES),
        Card(Rank.THREE, Suit.HEARTS),
        Card(Rank.FOUR, Suit.DIAMONDS),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.QUEEN, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
        Card(Rank.NINE, Suit.DIAMONDS),
        Card(Rank.TWO, Suit.CLUBS),
    ]
    session = GameSession()
    session.new_game(deck=front + [card for card in build_deck() if card not in front])
    return GameService(session)


def test_initial_view():
    service = scenario_service()
    view = service.get_view()

    assert view.status == "in_progress"
    assert view.draw_pile_count == 44
    assert view.bottom_pile_count == 4
    assert view.discard_count == 0
    assert [card.label for card in view.reserve] == ["♥ 5", "♦ 9", "♣ 2"]
    assert all(card.face_up for card in view.reserve)
    assert view.current_target.card == {"rank": 8, "suit": "spades"}
    assert view.current_target.face_up
    assert view.matchable_count == 1
    assert view.matchable[0].id == encode_card(Card(Rank.NINE, Suit.DIAMONDS))
    assert view.history_depth == 0
    assert view.can_draw_new
    assert not view.can_undo


def test_view_before_first_game():
    view = GameService().get_view()
    assert view.status == "not_started"
    assert view.current_target is None
    assert view.reserve == []
    assert view.matchable_count == 0


def test_rejected_play_reports_error_code():
    service = scenario_service()
    outcome = service.play_reserve_card({"rank": 5, "suit": "hearts"})

    assert not outcome.ok
    assert outcome.error == "no_match"
    assert outcome.view.history_depth == 0


def test_play_by_id_then_undo():
    service = scenario_service()
    outcome = service.play_reserve_card_id(encode_card(Card(Rank.NINE, Suit.DIAMONDS)))

    assert outcome.ok
    assert outcome.error is None
    assert outcome.view.current_target.label == "♦ 9"
    assert len(outcome.view.reserve) == 3
    assert outcome.view.discard_count == 1
    assert outcome.view.history_depth == 1

    undone = service.undo()
    assert undone.ok
    assert undone.view.current_target.label == "♠ 8"
    assert [card.label for card in undone.view.reserve] == ["♥ 5", "♦ 9", "♣ 2"]
    assert undone.view.history_depth == 0


def test_draw_new_target_until_empty():
    service = scenario_service()
    for _ in range(4):
        assert service.draw_new_target().ok

    outcome = service.draw_new_target()
    assert not outcome.ok
    assert outcome.error == "bottom_pile_empty"
    assert not outcome.view.can_draw_new


def test_undo_without_history():
    outcome = scenario_service().undo()
    assert outcome.error == "no_history"


def test_malformed_payload_raises():
    service = scenario_service()
    with pytest.raises(InvalidCardPayload):
        service.play_reserve_card({"rank": 20, "suit": "hearts"})


def test_start_new_game_with_seed():
    service = GameService()
    first = service.start_new_game(seed=9)
    again = GameService().start_new_game(seed=9)

    assert first == again
    assert first.draw_pile_count == 44
    assert service.has_started()

    restarted = service.restart()
    assert restarted.ok
    assert restarted.view.history_depth == 0
