from datetime import timedelta

from raderbot.algorithms.base import Candle, EvalResult
from raderbot.algorithms.macd_bollinger import MacdBollingerBands

MINUTE = timedelta(minutes=1)

SELL_PARAMS = {
    "short_ema_period": 2,
    "long_ema_period": 4,
    "signal_ema_period": 2,
    "bollinger_period": 1000,
    "bollinger_multiplier": 0,
}

BUY_PARAMS = {
    "short_ema_period": 2,
    "long_ema_period": 4,
    "signal_ema_period": 2,
    "bollinger_period": 1,
    "bollinger_multiplier": 0,
}


def _run(algo, closes):
    return [algo.evaluate(Candle(symbol="BTCUSD", close=c)) for c in closes]


def test_constant_prices_never_signal():
    algo = MacdBollingerBands(MINUTE, {})
    results = _run(algo, [100.0] * 40)
    assert set(results) == {EvalResult.IGNORE}


def test_falling_prices_above_band_sell():
    algo = MacdBollingerBands(MINUTE, SELL_PARAMS)
    results = _run(algo, [100.0, 99.0, 98.0])
    assert results[:2] == [EvalResult.IGNORE, EvalResult.IGNORE]
    assert results[2] is EvalResult.SELL


def test_rising_prices_below_band_buy():
    algo = MacdBollingerBands(MINUTE, BUY_PARAMS)
    results = _run(algo, [100.0, 101.0, 102.0])
    assert results[:2] == [EvalResult.IGNORE, EvalResult.IGNORE]
    assert results[2] is EvalResult.BUY


def test_set_params_reconfigures():
    algo = MacdBollingerBands(MINUTE, {})
    algo.set_params(SELL_PARAMS)
    assert algo.params == SELL_PARAMS
    results = _run(algo, [100.0, 99.0, 98.0])
    assert results[2] is EvalResult.SELL


def test_data_points_are_kept_in_order():
    algo = MacdBollingerBands(MINUTE, {})
    _run(algo, [1.0, 2.0, 3.0])
    assert [k.close for k in algo.data_points] == [1.0, 2.0, 3.0]
    assert algo.interval == MINUTE