# chessbattle/config.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os
import tomllib  # python >=3.11

# Material weights in pawns. The king is never captured under legal play.
PIECE_VALUES = {
    "PAWN": 1,
    "KNIGHT": 3,
    "BISHOP": 3,
    "ROOK": 5,
    "QUEEN": 9,
    "KING": 0,
}

BOT_NAMES = [
    "Sainath Patlolla",
    "Divya",
    "Shivananda",
    "Balakrishna",
    "Marcel",
    "BishopBrain",
    "PawnStar",
    "Trivikram",
    "Shivram",
    "StrategistAI",
    "TacticalBot",
    "Ninja",
    "MoveGenius",
    "NoobChess",
    "Sanjay Ramaswamy",
]

@dataclass
class SearchConfig:
    max_depth: int = 3
    use_alpha_beta: bool = True  # False runs an exhaustive minimax (same move, more nodes)

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())

@dataclass
class BotConfig:
    difficulty: str = "random"
    think_delay_ms: int = 3500  # pacing only, never a search deadline
    human_color: str = "white"
    names: List[str] = field(default_factory=lambda: list(BOT_NAMES))

@dataclass
class StoreConfig:
    enabled: bool = True
    path: str = ".cache/games.json"

@dataclass
class CommentaryConfig:
    enabled: bool = True
    endpoint: str = "https://api.openai.com/v1/chat/completions"
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 50
    timeout_s: float = 5.0
    api_key_env: str = "OPENAI_API_KEY"
    fallback: str = "Commentary unavailable."

@dataclass
class UIConfig:
    app_name: str = "Chess Battle"
    api_port: int = 8000

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    bot: BotConfig = field(default_factory=BotConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    commentary: CommentaryConfig = field(default_factory=CommentaryConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "bot", "store", "commentary", "ui"):
            if section not in raw:
                continue
            target = getattr(cfg, section)
            for k, v in raw[section].items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

    def api_key(self) -> Optional[str]:
        return os.environ.get(self.commentary.api_key_env) or None

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHESSBATTLE_CONFIG_TOML", "config.toml"))

# env overrides for quick debugging
_override_depth = os.environ.get("CHESSBATTLE_SEARCH_DEPTH")
if _override_depth and _override_depth.isdigit():
    CONFIG.search.max_depth = int(_override_depth)
_override_difficulty = os.environ.get("CHESSBATTLE_DIFFICULTY")
if _override_difficulty:
    CONFIG.bot.difficulty = _override_difficulty
