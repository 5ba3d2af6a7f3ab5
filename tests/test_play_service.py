import pytest
from fastapi.testclient import TestClient

from engine.cards import Card, Rank, Suit
from engine.deck import build_deck
from engine.encode import encode_card
from engine.game import GameSession
from engine.service import GameService
from server.play_service import SessionState, app, sessions


@pytest.fixture
def client():
    sessions.clear()
    yield TestClient(app)
    sessions.clear()


def install_scenario():
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
    sessions["scenario"] = SessionState(GameService(session))
    return "scenario"


def test_start_session(client):
    response = client.post("/session/start", json={"seed": 4})
    assert response.status_code == 200
    body = response.json()
    assert body["session_id"] in sessions
    state = body["state"]
    assert state["draw_pile_count"] == 44
    assert state["bottom_pile_count"] == 4
    assert len(state["reserve"]) == 3


def test_start_session_with_rules(client):
    response = client.post("/session/start", json={"seed": 4, "rules": {"reserve_size": 5}})
    assert response.status_code == 200
    assert len(response.json()["state"]["reserve"]) == 5

    bad = client.post("/session/start", json={"rules": {"reserve_size": 0}})
    assert bad.status_code == 422


def test_unknown_session(client):
    assert client.get("/session/missing").status_code == 404
    assert client.post("/session/missing/draw").status_code == 404


def test_play_match_and_undo(client):
    session_id = install_scenario()

    rejected = client.post(f"/session/{session_id}/play", json={"card": {"rank": 5, "suit": "hearts"}})
    assert rejected.status_code == 409
    assert rejected.json()["detail"]["error"] == "no_match"

    nine_id = encode_card(Card(Rank.NINE, Suit.DIAMONDS))
    played = client.post(f"/session/{session_id}/play", json={"card_id": nine_id})
    assert played.status_code == 200
    state = played.json()["state"]
    assert state["current_target"]["id"] == nine_id
    assert state["history_depth"] == 1
    assert len(state["reserve"]) == 3

    undone = client.post(f"/session/{session_id}/undo")
    assert undone.status_code == 200
    state = undone.json()["state"]
    assert state["current_target"]["card"] == {"rank": 8, "suit": "spades"}
    assert state["history_depth"] == 0


def test_play_request_validation(client):
    session_id = install_scenario()

    neither = client.post(f"/session/{session_id}/play", json={})
    assert neither.status_code == 422

    out_of_range = client.post(f"/session/{session_id}/play", json={"card_id": 77})
    assert out_of_range.status_code == 422

    bad_suit = client.post(f"/session/{session_id}/play", json={"card": {"rank": 3, "suit": "stars"}})
    assert bad_suit.status_code == 422


def test_draw_until_empty_and_restart(client):
    session_id = install_scenario()
    for _ in range(4):
        assert client.post(f"/session/{session_id}/draw").status_code == 200

    empty = client.post(f"/session/{session_id}/draw")
    assert empty.status_code == 409
    assert empty.json()["detail"]["error"] == "bottom_pile_empty"

    restarted = client.post(f"/session/{session_id}/restart")
    assert restarted.status_code == 200
    assert restarted.json()["state"]["bottom_pile_count"] == 4

    assert client.get(f"/session/{session_id}").json()["state"]["history_depth"] == 0


def test_close_session(client):
    session_id = install_scenario()
    assert client.delete(f"/session/{session_id}").status_code == 200
    assert session_id not in sessions
