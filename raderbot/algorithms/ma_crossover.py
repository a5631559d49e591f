"""Crossover of an exponential and a simple moving average."""

from __future__ import annotations

from collections import deque
from datetime import timedelta
from typing import Any

from raderbot.algorithms.base import (
    Algorithm,
    AlgorithmError,
    Candle,
    EvalResult,
    parse_usize,
)


class _ExponentialAverage:
    def __init__(self, period: int) -> None:
        if period < 1:
            raise AlgorithmError("Invalid params: EMA period must be at least 1")
        self._k = 2.0 / (period + 1.0)
        self._current: float | None = None

    def next(self, value: float) -> float:
        if self._current is None:
            self._current = value
        else:
            self._current = self._k * value + (1.0 - self._k) * self._current
        return self._current


class _SimpleAverage:
    def __init__(self, period: int) -> None:
        if period < 1:
            raise AlgorithmError("Invalid params: SMA period must be at least 1")
        self._window: deque[float] = deque(maxlen=period)

    def next(self, value: float) -> float:
        self._window.append(value)
        return sum(self._window) / len(self._window)


class EmaSmaCrossover(Algorithm):
    """Buys while the EMA is above the SMA and sells while it is below."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        self._configure(params)
        super().__init__(interval, params)

    def _configure(self, params: Any) -> None:
        ema_period = parse_usize("ema_period", params)
        sma_period = parse_usize("sma_period", params)
        ema = _ExponentialAverage(ema_period)
        sma = _SimpleAverage(sma_period)
        self._ema_period = ema_period
        self._sma_period = sma_period
        self._ema = ema
        self._sma = sma

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        result = EvalResult.IGNORE
        if len(self._data_points) >= self._sma_period:
            ema = self._ema.next(kline.close)
            sma = self._sma.next(kline.close)
            if ema > sma:
                result = EvalResult.BUY
            elif ema < sma:
                result = EvalResult.SELL
            elif kline.close > sma:
                result = EvalResult.BUY
            elif kline.close < sma:
                result = EvalResult.SELL
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        self._configure(params)
        self._params = params