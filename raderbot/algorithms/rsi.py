"""Relative strength index: buy when oversold, sell when overbought."""

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

DEFAULT_RSI_PERIOD = 14
OVERSOLD = 30.0
OVERBOUGHT = 70.0


class Rsi(Algorithm):
    """Buys below an RSI of 30, sells above 70 and otherwise waits."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        super().__init__(interval, params)
        try:
            self._rsi_period = parse_usize("rsi_period", params)
        except AlgorithmError:
            self._rsi_period = DEFAULT_RSI_PERIOD
        self._rsi = 0.0

    def _calculate_rsi(self) -> float:
        """RSI over the last ``rsi_period`` changes; 0.0 until there are enough candles."""
        period = self._rsi_period
        if len(self._data_points) <= period:
            return 0.0
        if period == 0:
            return math.nan
        closes = [k.close for k in self._data_points[-(period + 1):]]
        deltas = [newer - older for older, newer in zip(closes, closes[1:])]
        gains = 0.0
        losses = 0.0
        for delta in reversed(deltas):
            if delta > 0.0:
                gains += delta
            else:
                losses -= delta
        avg_gain = gains / period
        avg_loss = losses / period
        if avg_loss == 0.0:
            return 100.0
        rs = avg_gain / avg_loss
        rsi = 100.0 - 100.0 / (1.0 + rs)
        self._rsi = rsi
        return rsi

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        rsi = self._calculate_rsi()
        if rsi < OVERSOLD:
            result = EvalResult.BUY
        elif rsi > OVERBOUGHT:
            result = EvalResult.SELL
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        try:
            self._rsi_period = parse_usize("rsi_period", params)
        except AlgorithmError:
            pass
        self._params = params