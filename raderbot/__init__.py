"""Trading account bookkeeping, position and trade records, and candle-driven signal algorithms."""

__version__ = "0.1.0"