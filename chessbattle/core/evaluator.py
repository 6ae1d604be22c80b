"""Material-only static evaluator."""

import chess
from chessbattle.config import CONFIG


class MaterialEvaluator:
    def __init__(self, piece_values=None):
        values = piece_values or CONFIG.eval.piece_values
        # Indexed by python-chess piece type (PAWN=1 .. KING=6).
        self._weights = [0] * 7
        for pt in chess.PIECE_TYPES:
            self._weights[pt] = values.get(chess.piece_name(pt).upper(), 0)

    def weight(self, piece_type: int) -> int:
        return self._weights[piece_type]

    def evaluate(self, board: chess.Board, perspective: int = 1) -> int:
        """Material balance, White positive, multiplied by `perspective` (+1 or -1)."""
        score = 0
        for sq in chess.SQUARES:
            piece = board.piece_at(sq)
            if piece is None:
                continue
            if piece.color == chess.WHITE:
                score += self._weights[piece.piece_type]
            else:
                score -= self._weights[piece.piece_type]
        return perspective * score
