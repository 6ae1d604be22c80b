import logging
import time
from typing import Optional, Tuple

import chess

from chessbattle.config import CONFIG
from chessbattle.core.board import child_position
from chessbattle.core.evaluator import MaterialEvaluator

log = logging.getLogger(__name__)

INF = 1000000


def side_perspective(board: chess.Board) -> int:
    """+1 when White is to move, -1 for Black."""
    return 1 if board.turn == chess.WHITE else -1


class SearchEngine:
    def __init__(self, evaluator: Optional[MaterialEvaluator] = None, depth: Optional[int] = None,
                 use_alpha_beta: Optional[bool] = None):
        self.evaluator = evaluator or MaterialEvaluator()
        self.max_depth = depth if depth is not None else CONFIG.search.max_depth
        self.use_alpha_beta = CONFIG.search.use_alpha_beta if use_alpha_beta is None else use_alpha_beta
        self.nodes = 0

    def find_best_move(self, board: chess.Board) -> Tuple[Optional[chess.Move], int]:
        """
        Returns (best_move, score) for the side to move.
        best_move is None when there is no legal move; the caller must not apply anything.
        Ties keep the first move in python-chess enumeration order.
        """
        self.nodes = 0
        moves = list(board.legal_moves)
        if not moves:
            return None, 0

        start_time = time.time()
        perspective = side_perspective(board)
        best_move = None
        best_score = -INF

        for move in moves:
            child = child_position(board, move)
            score = -self.negamax(child, self.max_depth - 1, -INF, INF, -perspective)
            if score > best_score:
                best_score = score
                best_move = move

        elapsed = time.time() - start_time
        log.debug("depth %d best %s score %d nodes %d time %.3fs",
                  self.max_depth, best_move.uci(), best_score, self.nodes, elapsed)
        return best_move, best_score

    # -------------------------
    # Core negamax (alpha-beta)
    # -------------------------
    def negamax(self, board: chess.Board, depth: int, alpha: int, beta: int, perspective: int) -> int:
        """
        Score of `board` for the side to move, where `perspective` is +1 if that side is
        White and -1 if Black. `board` is never mutated; children are fresh copies.
        """
        self.nodes += 1
        if depth <= 0:
            return perspective * self.evaluator.evaluate(board)

        moves = list(board.legal_moves)
        if not moves:
            # checkmate or stalemate: score the material as it stands
            return perspective * self.evaluator.evaluate(board)

        best_eval = -INF
        for move in moves:
            child = child_position(board, move)
            evaluation = -self.negamax(child, depth - 1, -beta, -alpha, -perspective)
            if evaluation > best_eval:
                best_eval = evaluation
            if not self.use_alpha_beta:
                continue
            alpha = max(alpha, evaluation)
            if alpha >= beta:
                break

        return best_eval
