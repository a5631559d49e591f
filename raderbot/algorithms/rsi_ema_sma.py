"""RSI combined with three simple moving averages and an EMA."""

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
DEFAULT_SHORT_SMA = 5
DEFAULT_MEDIUM_SMA = 12
DEFAULT_LONG_SMA = 26
DEFAULT_EMA = 9
NEUTRAL_RSI = 50.0


def _usize_or(key: str, params: Any, default: int) -> int:
    try:
        return parse_usize(key, params)
    except AlgorithmError:
        return default


class RsiEmaSma(Algorithm):
    """Buys when oversold in an uptrend, sells when overbought in a downtrend."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        super().__init__(interval, params)
        self._rsi_period = _usize_or("rsi_period", params, DEFAULT_RSI_PERIOD)
        self._short_sma_period = _usize_or("short_sma_period", params, DEFAULT_SHORT_SMA)
        self._medium_sma_period = _usize_or("medium_sma_period", params, DEFAULT_MEDIUM_SMA)
        self._long_sma_period = _usize_or("long_sma_period", params, DEFAULT_LONG_SMA)
        self._ema_period = _usize_or("ema_period", params, DEFAULT_EMA)
        self._last_ema = 0.0

    def _calculate_rsi(self) -> float:
        period = self._rsi_period
        if len(self._data_points) < period + 1:
            return NEUTRAL_RSI
        if period == 0:
            return math.nan
        closes = [k.close for k in self._data_points[-(period + 1):]]
        gains = 0.0
        losses = 0.0
        for older, newer in zip(closes, closes[1:]):
            delta = newer - older
            if delta > 0.0:
                gains += delta
            else:
                losses -= delta
        avg_gain = gains / period
        avg_loss = losses / period
        if avg_loss == 0.0:
            return 100.0
        rs = avg_gain / avg_loss
        return 100.0 - 100.0 / (1.0 + rs)

    def _calculate_ema(self, period: int) -> float:
        """Advance the running EMA with the latest close."""
        if not self._data_points:
            return 0.0
        k = 2.0 / (period + 1.0)
        close = self._data_points[-1].close
        if self._last_ema == 0.0:
            self._last_ema = close
        else:
            self._last_ema = (close - self._last_ema) * k + self._last_ema
        return self._last_ema

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        rsi = self._calculate_rsi()
        short_sma = self._recent_mean(self._short_sma_period)
        medium_sma = self._recent_mean(self._medium_sma_period)
        long_sma = self._recent_mean(self._long_sma_period)
        ema = self._calculate_ema(self._ema_period)
        if rsi < 30.0 and short_sma > medium_sma > long_sma and short_sma > ema:
            result = EvalResult.BUY
        elif rsi > 70.0 and short_sma < medium_sma < long_sma and short_sma < ema:
            result = EvalResult.SELL
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        """Update periods; missing ones are kept, except the EMA period, which resets to 9."""
        self._rsi_period = _usize_or("rsi_period", params, self._rsi_period)
        self._short_sma_period = _usize_or("short_sma_period", params, self._short_sma_period)
        self._medium_sma_period = _usize_or(
            "medium_sma_period", params, self._medium_sma_period
        )
        self._long_sma_period = _usize_or("long_sma_period", params, self._long_sma_period)
        self._ema_period = _usize_or("ema_period", params, DEFAULT_EMA)
        self._params = params