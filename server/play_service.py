"""REST service exposing Off-By-One Solitaire tables."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import asdict
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, model_validator

from engine.cards import InvalidCardPayload
from engine.game import GameSession
from engine.rules_schema import RuleSet
from engine.service import CommandOutcome, GameService, GameView

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    seed: Optional[int] = None
    rules: Optional[RuleSet] = None


class CardPayload(BaseModel):
    rank: int | str
    suit: str


class PlayRequest(BaseModel):
    card_id: Optional[int] = None
    card: Optional[CardPayload] = None

    @model_validator(mode="after")
    def exactly_one_card(self) -> "PlayRequest":
        if (self.card_id is None) == (self.card is None):
            raise ValueError("Provide exactly one of 'card_id' or 'card'.")
        return self


class SessionState:
    """One table. Commands against it are serialized by ``lock``."""

    def __init__(self, service: GameService) -> None:
        self.service = service
        self.lock = threading.Lock()


sessions: Dict[str, SessionState] = {}


app = FastAPI(title="Off-By-One Solitaire Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_view(view: GameView) -> Dict[str, object]:
    return asdict(view)


def ensure_session(session_id: str) -> SessionState:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def command_response(outcome: CommandOutcome) -> Dict[str, object]:
    if not outcome.ok:
        raise HTTPException(
            status_code=409,
            detail={"error": outcome.error, "message": outcome.message, "state": serialize_view(outcome.view)},
        )
    return {"message": outcome.message, "state": serialize_view(outcome.view)}


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    service = GameService(GameSession(seed=request.seed, rules=request.rules or RuleSet()))
    view = service.start_new_game()
    session_id = uuid.uuid4().hex
    sessions[session_id] = SessionState(service)
    logger.info("Started session %s (seed=%s)", session_id, request.seed)
    return {"session_id": session_id, "state": serialize_view(view)}


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        return {"state": serialize_view(session.service.get_view())}


@app.post("/session/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        try:
            if request.card_id is not None:
                outcome = session.service.play_reserve_card_id(request.card_id)
            else:
                assert request.card is not None
                outcome = session.service.play_reserve_card(request.card.model_dump())
        except InvalidCardPayload as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return command_response(outcome)


@app.post("/session/{session_id}/draw")
def draw_target(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        return command_response(session.service.draw_new_target())


@app.post("/session/{session_id}/undo")
def undo(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        return command_response(session.service.undo())


@app.post("/session/{session_id}/restart")
def restart(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        return command_response(session.service.restart())


@app.delete("/session/{session_id}")
def close_session(session_id: str) -> Dict[str, object]:
    ensure_session(session_id)
    sessions.pop(session_id, None)
    return {"closed": session_id}
