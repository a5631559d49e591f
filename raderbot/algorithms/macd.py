"""Moving average convergence/divergence against its signal line."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from raderbot.algorithms.base import (
    Algorithm,
    AlgorithmError,
    Candle,
    EvalResult,
    parse_usize,
)

DEFAULT_SHORT_EMA = 12
DEFAULT_LONG_EMA = 26
DEFAULT_SIGNAL_EMA = 9


def _unsigned_or(params: Any, key: str, default: int) -> int:
    """Return an unsigned integer stored under ``key``, else ``default``."""
    value = params.get(key) if isinstance(params, dict) else None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return default


def _ema(values: list[float], period: int) -> float:
    """Exponential average folded from the newest value back to the oldest."""
    if len(values) < period:
        return 0.0
    k = 2.0 / (period + 1.0)
    ema = 0.0
    for value in reversed(values):
        ema = value if ema == 0.0 else value * k + ema * (1.0 - k)
    return ema


class Macd(Algorithm):
    """Buys while the MACD line is above its signal line, sells while below."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        super().__init__(interval, params)
        self._short_ema_period = _unsigned_or(params, "short_ema_period", DEFAULT_SHORT_EMA)
        self._long_ema_period = _unsigned_or(params, "long_ema_period", DEFAULT_LONG_EMA)
        self._signal_ema_period = _unsigned_or(params, "signal_ema_period", DEFAULT_SIGNAL_EMA)
        self._macd_line: list[float] = []
        self._signal_line: list[float] = []

    def _update_lines(self) -> None:
        prices = [k.close for k in self._data_points]
        macd_value = _ema(prices, self._short_ema_period) - _ema(prices, self._long_ema_period)
        self._macd_line.append(macd_value)
        if len(self._macd_line) >= self._signal_ema_period:
            signal_value = _ema(self._macd_line, self._signal_ema_period)
        else:
            signal_value = 0.0
        self._signal_line.append(signal_value)

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        self._update_lines()
        latest_macd = self._macd_line[-1]
        latest_signal = self._signal_line[-1]
        if latest_macd > latest_signal:
            result = EvalResult.BUY
        elif latest_macd < latest_signal:
            result = EvalResult.SELL
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        for key, attr in (
            ("short_ema_period", "_short_ema_period"),
            ("long_ema_period", "_long_ema_period"),
            ("signal_ema_period", "_signal_ema_period"),
        ):
            try:
                setattr(self, attr, parse_usize(key, params))
            except AlgorithmError:
                pass
        self._params = params