"""Chess Battle: opponent engine with random, greedy and deep difficulty tiers."""

__version__ = "1.0.0"
