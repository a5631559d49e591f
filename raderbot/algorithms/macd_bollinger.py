"""MACD crossovers confirmed by a break out of the Bollinger bands."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Any

from raderbot.algorithms.base import (
    Algorithm,
    AlgorithmError,
    Candle,
    EvalResult,
    parse_usize,
)

DEFAULT_BOLLINGER_PERIOD = 20
DEFAULT_BOLLINGER_MULTIPLIER = 2.0
DEFAULT_SHORT_EMA = 12
DEFAULT_LONG_EMA = 26
DEFAULT_SIGNAL_EMA = 9


def _unsigned_or(params: Any, key: str, default: int) -> int:
    """Return an unsigned integer stored under ``key``, else ``default``."""
    value = params.get(key) if isinstance(params, dict) else None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return default


def _number_or(params: Any, key: str, default: float) -> float:
    """Return any number stored under ``key`` as a float, else ``default``."""
    value = params.get(key) if isinstance(params, dict) else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def _ema(values: list[float], period: int) -> float:
    """Exponential average folded from the oldest value to the newest."""
    if not values or period == 0:
        return 0.0
    k = 2.0 / (period + 1.0)
    acc = 0.0
    for value in values:
        acc = value if acc == 0.0 else value * k + acc * (1.0 - k)
    return acc


class MacdBollingerBands(Algorithm):
    """Buys below the lower band on a rising MACD, sells above the upper band on a falling one."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        super().__init__(interval, params)
        self._bollinger_period = _unsigned_or(
            params, "bollinger_period", DEFAULT_BOLLINGER_PERIOD
        )
        self._bollinger_multiplier = _number_or(
            params, "bollinger_multiplier", DEFAULT_BOLLINGER_MULTIPLIER
        )
        self._short_ema_period = _unsigned_or(params, "short_ema_period", DEFAULT_SHORT_EMA)
        self._long_ema_period = _unsigned_or(params, "long_ema_period", DEFAULT_LONG_EMA)
        self._signal_ema_period = _unsigned_or(params, "signal_ema_period", DEFAULT_SIGNAL_EMA)
        self._macd_line: list[float] = []
        self._signal_line: list[float] = []

    def _bands(self) -> tuple[float, float, float]:
        """Bands over every stored close, scaled by the configured period."""
        if self._bollinger_period == 0:
            return math.nan, math.nan, math.nan
        prices = [k.close for k in self._data_points]
        sma = sum(prices) / self._bollinger_period
        variance = sum((p - sma) ** 2 for p in prices) / self._bollinger_period
        std_dev = math.sqrt(variance)
        spread = std_dev * self._bollinger_multiplier
        return sma + spread, sma, sma - spread

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
        upper, _, lower = self._bands()
        self._update_lines()
        latest_macd = self._macd_line[-1]
        latest_signal = self._signal_line[-1]
        price = kline.close
        if price < lower and latest_macd > latest_signal:
            result = EvalResult.BUY
        elif price > upper and latest_macd < latest_signal:
            result = EvalResult.SELL
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        for key, attr, convert in (
            ("bollinger_period", "_bollinger_period", int),
            ("bollinger_multiplier", "_bollinger_multiplier", float),
            ("short_ema_period", "_short_ema_period", int),
            ("long_ema_period", "_long_ema_period", int),
            ("signal_ema_period", "_signal_ema_period", int),
        ):
            try:
                setattr(self, attr, convert(parse_usize(key, params)))
            except AlgorithmError:
                pass
        self._params = params