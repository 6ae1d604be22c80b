"""Board wrapper over python-chess providing move history and derived positions."""

from typing import List, Optional

import chess


def child_position(board: chess.Board, move: chess.Move) -> chess.Board:
    """Return a new board with `move` applied. `board` itself is left untouched."""
    child = board.copy(stack=False)
    child.push(move)
    return child


def parse_square(name: str) -> chess.Square:
    """'e2' -> chess.E2. Raises ValueError on garbage."""
    return chess.parse_square(name.strip().lower())


class ChessBoard:
    def __init__(self, fen: Optional[str] = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history: List[str] = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. History is dropped."""
        self.board.set_fen(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    def snapshot(self) -> chess.Board:
        """Independent copy handed to the search core."""
        return self.board.copy()

    def find_move(self, from_sq: str, to_sq: str, promotion: Optional[str] = None) -> Optional[chess.Move]:
        """Resolve a from/to pair to a legal move, promoting to a queen by default."""
        try:
            origin = parse_square(from_sq)
            target = parse_square(to_sq)
            promo = chess.Piece.from_symbol(promotion).piece_type if promotion else chess.QUEEN
        except ValueError:
            return None
        piece = self.board.piece_at(origin)
        if piece is None or piece.piece_type != chess.PAWN or chess.square_rank(target) not in (0, 7):
            promo = None
        move = chess.Move(origin, target, promotion=promo)
        if move in self.board.legal_moves:
            return move
        return None

    def push(self, move: chess.Move):
        """Apply an already-validated move."""
        self.board.push(move)
        self.move_history.append(move.uci())

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4'). Returns True if legal."""
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            return False
        if move not in self.board.legal_moves:
            return False
        self.push(move)
        return True

    def undo_move(self) -> Optional[chess.Move]:
        """Pop the last move, if any."""
        if not self.move_history:
            return None
        self.move_history.pop()
        return self.board.pop()

    def get_legal_moves(self, square: Optional[str] = None) -> List[str]:
        """Return legal moves as UCI strings, optionally only those leaving `square`."""
        if square is None:
            return [m.uci() for m in self.board.legal_moves]
        origin = parse_square(square)
        return [m.uci() for m in self.board.legal_moves if m.from_square == origin]

    def in_check(self) -> bool:
        return self.board.is_check()

    def is_game_over(self):
        """Check if the game has ended."""
        return self.board.is_game_over()

    def __str__(self):
        return str(self.board)
