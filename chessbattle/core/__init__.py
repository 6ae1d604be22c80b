"""Core engine components: board glue, material evaluator, negamax search and tier selection."""

from .board import ChessBoard, child_position
from .evaluator import MaterialEvaluator
from .search import SearchEngine
from .strategy import DifficultyTier, StrategySelector
