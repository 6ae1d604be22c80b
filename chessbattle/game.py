"""Turn controller: owns the live board and alternates human and bot turns."""

import logging
import random
import threading
from dataclasses import dataclass, asdict
from typing import Callable, List, Optional, Tuple

import chess

from chessbattle.commentary import CommentaryService, describe_move
from chessbattle.config import CONFIG
from chessbattle.core.board import ChessBoard, parse_square
from chessbattle.core.strategy import DifficultyTier, StrategySelector
from chessbattle.errors import IllegalMoveError, InvalidPositionError, NothingToUndoError, StoreError
from chessbattle.persistence import GameStore

log = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """One applied move in the game history."""

    uci: str
    san: str
    by_bot: bool
    is_capture: bool
    is_check: bool
    fen: str  # position after the move
    commentary: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def _parse_color(name: str) -> bool:
    return chess.BLACK if str(name).strip().lower() == "black" else chess.WHITE


class GameController:
    """
    Single writer of the current position.

    The search core only ever sees `ChessBoard.snapshot()` copies. All
    mutations go through this class under one lock, so the REST handlers,
    the CLI and the delayed bot timer can share an instance.
    """

    def __init__(self, selector: Optional[StrategySelector] = None, store: Optional[GameStore] = None,
                 commentary: Optional[CommentaryService] = None, user_id: str = "guest",
                 difficulty=None, human_color: Optional[str] = None, think_delay_ms: Optional[int] = None):
        self.board = ChessBoard()
        self.selector = selector or StrategySelector()
        self.store = store
        self.commentary = commentary
        self.user_id = user_id
        self.difficulty = DifficultyTier.parse(difficulty or CONFIG.bot.difficulty)
        self.human_color = _parse_color(human_color or CONFIG.bot.human_color)
        self.think_delay_ms = CONFIG.bot.think_delay_ms if think_delay_ms is None else think_delay_ms
        self.bot_name = random.choice(CONFIG.bot.names) if CONFIG.bot.names else "Bot"
        self.records: List[MoveRecord] = []
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None

    # ── Session ─────────────────────────────────────────────

    def load(self) -> bool:
        """Restore the saved position for this user. Returns True if one was found."""
        if self.store is None:
            return False
        try:
            saved = self.store.load(self.user_id)
        except StoreError as e:
            log.error("Unable to load saved game, starting new game: %s", e)
            return False
        if saved is None:
            return False
        with self._lock:
            self.board.set_fen(saved.fen())
            self.records.clear()
        log.info("Loaded saved game for %s: %s", self.user_id, saved.fen())
        return True

    def new_game(self):
        self.cancel()
        with self._lock:
            self.board.reset()
            self.records.clear()
            self._save()
        log.info("New game started (%s, bot %s)", self.difficulty.value, self.bot_name)

    def set_position(self, fen: str):
        """Replace the current position. History is dropped."""
        try:
            board = chess.Board(fen)
        except ValueError as e:
            raise InvalidPositionError(f"Invalid FEN: {e}") from e
        self.cancel()
        with self._lock:
            self.board.set_fen(board.fen())
            self.records.clear()
            self._save()

    def set_difficulty(self, tier) -> DifficultyTier:
        self.difficulty = DifficultyTier.parse(tier)
        return self.difficulty

    # ── Queries ─────────────────────────────────────────────

    def is_bot_turn(self) -> bool:
        with self._lock:
            return self.board.board.turn != self.human_color and not self.board.is_game_over()

    def legal_targets(self, square: str) -> List[str]:
        """Destination squares for the piece on `square` (empty if none can move)."""
        try:
            origin = parse_square(square)
        except ValueError:
            raise IllegalMoveError(f"Invalid square: {square}")
        with self._lock:
            return sorted({chess.square_name(m.to_square)
                           for m in self.board.board.legal_moves if m.from_square == origin})

    def status(self) -> dict:
        with self._lock:
            b = self.board.board
            over = b.is_game_over()
            return {
                "fen": b.fen(),
                "turn": "white" if b.turn == chess.WHITE else "black",
                "human_color": "white" if self.human_color == chess.WHITE else "black",
                "bot_name": self.bot_name,
                "difficulty": self.difficulty.value,
                "in_check": self.board.in_check(),
                "is_game_over": over,
                "result": b.result() if over else None,
                "history": [r.to_dict() for r in self.records],
            }

    # ── Moves ───────────────────────────────────────────────

    def human_move(self, from_sq: str, to_sq: str, promotion: Optional[str] = None) -> MoveRecord:
        with self._lock:
            if self.board.is_game_over():
                raise IllegalMoveError("Game is over")
            if self.board.board.turn != self.human_color:
                raise IllegalMoveError("Not your turn")
            move = self.board.find_move(from_sq, to_sq, promotion)
            if move is None:
                raise IllegalMoveError("Invalid move")
            record, description = self._apply(move, by_bot=False)
        self._comment(record, description)
        return record

    def bot_move(self) -> Optional[MoveRecord]:
        """
        Ask the selector for exactly one move and apply it.
        Returns None when the bot has no legal move: the game has ended.
        """
        with self._lock:
            if self.board.is_game_over():
                return None
            if self.board.board.turn == self.human_color:
                raise IllegalMoveError("Not the bot's turn")
            move = self.selector.select_move(self.board.snapshot(), self.difficulty)
            if move is None:
                log.info("Bot has no move, game over: %s", self.board.board.result())
                return None
            record, description = self._apply(move, by_bot=True)
        self._comment(record, description)
        return record

    def undo(self) -> List[MoveRecord]:
        """Take back plies until the last human move is undone and it is the human's turn."""
        self.cancel()
        with self._lock:
            if not any(not r.by_bot for r in self.records):
                raise NothingToUndoError("No more moves to undo")
            undone = []
            while self.records:
                record = self.records.pop()
                self.board.undo_move()
                undone.append(record)
                if not record.by_bot:
                    break
            self._save()
        return undone

    # ── Bot pacing ──────────────────────────────────────────

    def schedule_bot_move(self, callback: Optional[Callable[[Optional[MoveRecord]], None]] = None,
                          delay_ms: Optional[int] = None) -> threading.Timer:
        """
        Play the bot move after the "thinking" delay on a daemon timer.
        The delay is pacing only; the search itself runs to completion.
        """
        self.cancel()
        delay = self.think_delay_ms if delay_ms is None else delay_ms

        def worker():
            try:
                record = self.bot_move()
            except IllegalMoveError as e:
                log.info("Scheduled bot move skipped: %s", e)
                return
            if callback:
                callback(record)

        timer = threading.Timer(delay / 1000.0, worker)
        timer.daemon = True
        with self._lock:
            self._timer = timer
        timer.start()
        return timer

    def cancel(self):
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    # ── Internals ───────────────────────────────────────────

    def _apply(self, move: chess.Move, by_bot: bool) -> Tuple[MoveRecord, str]:
        b = self.board.board
        description = describe_move(b, move)
        san = b.san(move)
        is_capture = b.is_capture(move)
        self.board.push(move)
        record = MoveRecord(
            uci=move.uci(),
            san=san,
            by_bot=by_bot,
            is_capture=is_capture,
            is_check=b.is_check(),
            fen=b.fen(),
        )
        self.records.append(record)
        self._save()
        log.info("%s played %s", self.bot_name if by_bot else "Player", san)
        return record, description

    def _save(self):
        if self.store is None:
            return
        try:
            self.store.save(self.user_id, self.board.board)
        except StoreError as e:
            log.error("Error saving game state: %s", e)

    def _comment(self, record: MoveRecord, description: str):
        if self.commentary is None:
            return
        record.commentary = self.commentary.comment(description)
