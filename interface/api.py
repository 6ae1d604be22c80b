"""FastAPI REST interface for a single Chess Battle game session."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from chessbattle.commentary import CommentaryService
from chessbattle.config import CONFIG
from chessbattle.errors import ChessBattleError
from chessbattle.game import GameController
from chessbattle.log import setup_logging
from chessbattle.persistence import GameStore

setup_logging(CONFIG.log_level)
log = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.app_name, version="1.0.0")

# Shared controller: the only writer of the live position.
controller = GameController(
    store=GameStore(CONFIG.store.path) if CONFIG.store.enabled else None,
    commentary=CommentaryService(),
)
controller.load()


class MoveRequest(BaseModel):
    from_square: str  # e.g. "e2"
    to_square: str
    promotion: Optional[str] = None  # "q", "r", "b" or "n"; queen if omitted


class FenRequest(BaseModel):
    fen: str


class DifficultyRequest(BaseModel):
    difficulty: str


def _bad_request(e: ChessBattleError) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))


@app.get("/game")
def get_game():
    return controller.status()


@app.get("/game/moves/{square}")
def get_targets(square: str):
    try:
        targets = controller.legal_targets(square)
    except ChessBattleError as e:
        raise _bad_request(e)
    return {"square": square, "targets": targets}


@app.post("/game/move")
def make_move(req: MoveRequest):
    try:
        record = controller.human_move(req.from_square, req.to_square, req.promotion)
    except ChessBattleError as e:
        raise _bad_request(e)
    return {"move": record.to_dict(), **controller.status()}


@app.post("/game/bot")
def bot_move():
    try:
        record = controller.bot_move()
    except ChessBattleError as e:
        raise _bad_request(e)
    return {"move": record.to_dict() if record else None, **controller.status()}


@app.post("/game/new")
def new_game():
    controller.new_game()
    return controller.status()


@app.post("/game/undo")
def undo():
    try:
        undone = controller.undo()
    except ChessBattleError as e:
        raise _bad_request(e)
    return {"undone": [r.uci for r in undone], **controller.status()}


@app.post("/game/position")
def set_position(req: FenRequest):
    try:
        controller.set_position(req.fen)
    except ChessBattleError as e:
        raise _bad_request(e)
    return controller.status()


@app.post("/game/difficulty")
def set_difficulty(req: DifficultyRequest):
    tier = controller.set_difficulty(req.difficulty)
    return {"difficulty": tier.value}
