"""Sell above the upper Bollinger band, buy below the lower one."""

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

DEFAULT_PERIOD = 20
DEFAULT_MULTIPLIER = 2


def _usize_or(key: str, params: Any, default: int) -> int:
    try:
        return parse_usize(key, params)
    except AlgorithmError:
        return default


class BollingerBands(Algorithm):
    """Bands at ``multiplier`` standard deviations around the ``period`` mean."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        super().__init__(interval, params)
        self._period = _usize_or("period", params, DEFAULT_PERIOD)
        self._multiplier = float(_usize_or("multiplier", params, DEFAULT_MULTIPLIER))

    def _std_dev(self, sma: float) -> float:
        if len(self._data_points) < self._period:
            return 0.0
        if self._period == 0:
            return math.nan
        variance = (
            sum((c - sma) ** 2 for c in self._recent_closes(self._period)) / self._period
        )
        return math.sqrt(variance)

    def _bands(self) -> tuple[float, float, float]:
        sma = self._recent_mean(self._period)
        std_dev = self._std_dev(sma)
        return sma + std_dev * self._multiplier, sma, sma - std_dev * self._multiplier

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        upper, _, lower = self._bands()
        if kline.close > upper:
            result = EvalResult.SELL
        elif kline.close < lower:
            result = EvalResult.BUY
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        self._period = _usize_or("period", params, self._period)
        self._multiplier = float(
            _usize_or("multiplier", params, int(self._multiplier))
            if isinstance(params, dict) and "multiplier" in params
            else self._multiplier
        )
        self._params = params