"""Exceptions raised at the game boundary. The search core never raises these."""


class ChessBattleError(Exception):
    """Base class for errors a caller can show to the player."""


class IllegalMoveError(ChessBattleError):
    """A human move was rejected (illegal, out of turn, or game over)."""


class NothingToUndoError(ChessBattleError):
    """Undo was requested with no player move left to take back."""


class StoreError(ChessBattleError):
    """The saved-games file could not be read or written."""


class InvalidPositionError(ChessBattleError):
    """A FEN string could not be parsed into a position."""
