"""Crossover of short, medium and long simple moving averages."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from raderbot.algorithms.base import Algorithm, Candle, EvalResult, parse_usize


class ThreeMaCrossover(Algorithm):
    """Buys when short > medium > long averages and sells on the reverse order."""

    def __init__(self, interval: timedelta, params: Any) -> None:
        self._short_period, self._medium_period, self._long_period = self._parse(params)
        super().__init__(interval, params)

    @staticmethod
    def _parse(params: Any) -> tuple[int, int, int]:
        return (
            parse_usize("short_period", params),
            parse_usize("medium_period", params),
            parse_usize("long_period", params),
        )

    def evaluate(self, kline: Candle) -> EvalResult:
        self._data_points.append(kline)
        result = EvalResult.IGNORE
        if len(self._data_points) >= self._long_period:
            short_ma = self._recent_mean(self._short_period)
            medium_ma = self._recent_mean(self._medium_period)
            long_ma = self._recent_mean(self._long_period)
            if short_ma > medium_ma > long_ma:
                result = EvalResult.BUY
            elif short_ma < medium_ma < long_ma:
                result = EvalResult.SELL
        self.clean_data_points()
        return result

    def set_params(self, params: Any) -> None:
        self._short_period, self._medium_period, self._long_period = self._parse(params)
        self._params = params