"""Buy above a simple moving average, sell at or below it."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from raderbot.algorithms.base import Algorithm, Candle, EvalResult, parse_usize


class SimpleMovingAverage(Algorithm):
    """Compares each close with the mean of the last ``sma_period`` closes."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        self._period = parse_usize("sma_period", params)
        super().__init__(interval, params)

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        if len(self._data_points) >= self._period:
            sma = self._recent_mean(self._period)
            result = EvalResult.BUY if kline.close > sma else EvalResult.SELL
        else:
            result = EvalResult.IGNORE
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        self._period = parse_usize("sma_period", params)
        self._params = params