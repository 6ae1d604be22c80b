"""Difficulty tiers and the move selector the bot side calls once per turn."""

import enum
import logging
import random
from typing import Callable, Dict, Optional, Union

import chess

from chessbattle.core.board import child_position
from chessbattle.core.evaluator import MaterialEvaluator
from chessbattle.core.search import SearchEngine, side_perspective, INF

log = logging.getLogger(__name__)


class DifficultyTier(enum.Enum):
    RANDOM = "random"
    GREEDY = "greedy"
    DEEP = "deep"

    @classmethod
    def parse(cls, value: Union[str, "DifficultyTier", None]) -> "DifficultyTier":
        """Accepts tier names and the old product labels. Unknown values fall back to RANDOM."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower()
        tier = _ALIASES.get(key)
        if tier is None:
            log.warning("Unknown difficulty %r, falling back to random", value)
            return cls.RANDOM
        return tier


_ALIASES = {
    "random": DifficultyTier.RANDOM,
    "beginner": DifficultyTier.RANDOM,
    "easy": DifficultyTier.RANDOM,
    "greedy": DifficultyTier.GREEDY,
    "intermediate": DifficultyTier.GREEDY,
    "medium": DifficultyTier.GREEDY,
    "deep": DifficultyTier.DEEP,
    "professional": DifficultyTier.DEEP,
    "hard": DifficultyTier.DEEP,
}


class StrategySelector:
    """
    Picks the bot's move for a position.

    select_move() returns None when the side to move has no legal move
    (checkmate or stalemate); that is a result, not an error.
    """

    def __init__(self, search: Optional[SearchEngine] = None, evaluator: Optional[MaterialEvaluator] = None,
                 rng: Optional[random.Random] = None):
        self.evaluator = evaluator or (search.evaluator if search else MaterialEvaluator())
        self.search = search or SearchEngine(self.evaluator)
        self.rng = rng or random.Random()
        self._dispatch: Dict[DifficultyTier, Callable[[chess.Board], Optional[chess.Move]]] = {
            DifficultyTier.RANDOM: self._random_move,
            DifficultyTier.GREEDY: self._greedy_move,
            DifficultyTier.DEEP: self._deep_move,
        }

    def select_move(self, board: chess.Board, tier: Union[str, DifficultyTier]) -> Optional[chess.Move]:
        tier = DifficultyTier.parse(tier)
        if not any(board.legal_moves):
            log.info("No legal move for %s, nothing to play", "white" if board.turn else "black")
            return None
        move = self._dispatch[tier](board)
        log.debug("%s tier picked %s", tier.value, move.uci())
        return move

    def _random_move(self, board: chess.Board) -> chess.Move:
        return self.rng.choice(list(board.legal_moves))

    def _greedy_move(self, board: chess.Board) -> chess.Move:
        """One ply: material after each move, for the side that moved. First best wins."""
        mover = side_perspective(board)
        best_move = None
        best_score = -INF
        for move in board.legal_moves:
            score = self.evaluator.evaluate(child_position(board, move), mover)
            if score > best_score:
                best_score = score
                best_move = move
        return best_move

    def _deep_move(self, board: chess.Board) -> chess.Move:
        move, _score = self.search.find_best_move(board)
        return move
