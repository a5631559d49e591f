"""Shared pieces of the trading algorithms: candles, results and the base class."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

MAX_DATA_POINTS = 10080 * 2
TRIM_DATA_POINTS = 10080


class AlgorithmError(Exception):
    """Raised when an algorithm cannot be built or reconfigured."""


class EvalResult(Enum):
    """Decision an algorithm takes on a new candle."""

    BUY = "Buy"
    SELL = "Sell"
    IGNORE = "Ignore"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, kw_only=True)
class Candle:
    """One kline of market data."""

    symbol: str = ""
    interval: str = ""
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    open_time: int = 0
    close_time: int = 0


def parse_usize(key: str, params: Any) -> int:
    """Read a non-negative integer stored under ``key`` in ``params``.

    Integers and strings of decimal digits are accepted. Raises
    AlgorithmError when the key is missing or its value is not usable.
    """
    if not isinstance(params, dict) or key not in params:
        raise AlgorithmError(f"Invalid params: missing '{key}'")
    value = params[key]
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise AlgorithmError(f"Invalid params: '{key}' must not be negative")
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    raise AlgorithmError(f"Invalid params: '{key}' is not a non-negative integer")


class Algorithm(abc.ABC):
    """A trading algorithm that turns a stream of candles into decisions."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        self._interval = interval
        self._params = params
        self._data_points: list[Candle] = []

    @property
    def interval(self) -> timedelta:
        """Candle interval the algorithm works on."""
        return self._interval

    @property
    def params(self) -> Any:
        """Parameters the algorithm was last configured with."""
        return self._params

    @property
    def data_points(self) -> list[Candle]:
        """A copy of the candles seen so far."""
        return list(self._data_points)

    @abc.abstractmethod
    def evaluate(self, kline: Candle) -> EvalResult:
        """Record a new candle and return the decision it leads to."""

    @abc.abstractmethod
    def set_params(self, params: Any) -> None:
        """Reconfigure the algorithm; raises AlgorithmError on bad parameters."""

    def clean_data_points(self) -> None:
        """Drop the oldest week of candles once two weeks have piled up."""
        if len(self._data_points) > MAX_DATA_POINTS:
            del self._data_points[:TRIM_DATA_POINTS]

    def _recent_closes(self, count: int) -> list[float]:
        if count <= 0:
            return []
        return [k.close for k in self._data_points[-count:]]

    def _recent_mean(self, period: int) -> float:
        """Mean close of the last ``period`` candles; 0.0 when there are too few."""
        if len(self._data_points) < period:
            return 0.0
        if period == 0:
            return math.nan
        return sum(self._recent_closes(period)) / period