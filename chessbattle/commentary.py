"""
Short move commentary from an OpenAI-compatible chat-completions endpoint.

The game never waits on this to apply a move: any network or payload failure
returns the configured fallback line instead.
"""

import logging
from typing import Optional

import chess
import requests

from chessbattle.config import CONFIG, CommentaryConfig

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a chess commentator. Provide a brief, engaging commentary for the given chess move. "
    "should not exceed more than 10 words also make it funny."
)


def describe_move(board: chess.Board, move: chess.Move) -> str:
    """'knight from g1 to f3'. `board` is the position before the move."""
    piece = board.piece_at(move.from_square)
    name = chess.piece_name(piece.piece_type) if piece else "piece"
    return f"{name} from {chess.square_name(move.from_square)} to {chess.square_name(move.to_square)}"


class CommentaryService:
    def __init__(self, cfg: Optional[CommentaryConfig] = None, api_key: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.cfg = cfg or CONFIG.commentary
        self.api_key = api_key if api_key is not None else CONFIG.api_key()
        self.session = session or requests.Session()

    def comment(self, description: str) -> str:
        if not self.cfg.enabled or not self.api_key:
            return self.cfg.fallback
        payload = {
            "model": self.cfg.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Provide commentary for this chess move: {description}"},
            ],
            "max_tokens": self.cfg.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            r = self.session.post(self.cfg.endpoint, json=payload, headers=headers, timeout=self.cfg.timeout_s)
            r.raise_for_status()
            return r.json()["choices"][0]["message"]["content"].strip()
        except requests.RequestException as e:
            log.warning("Commentary request failed: %s", e)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            log.warning("Unexpected commentary payload: %s", e)
        return self.cfg.fallback
