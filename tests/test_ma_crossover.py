from datetime import timedelta

import pytest

from raderbot.algorithms.base import AlgorithmError, Candle, EvalResult
from raderbot.algorithms.ma_crossover import EmaSmaCrossover

MINUTE = timedelta(minutes=1)


def run(algo, closes):
    return [algo.evaluate(Candle(close=c)) for c in closes]


@pytest.mark.parametrize(
    "params",
    [{"sma_period": 3}, {"ema_period": 2}, {"ema_period": 0, "sma_period": 3},
     {"ema_period": 2, "sma_period": 0}],
)
def test_invalid_params_raise(params):
    with pytest.raises(AlgorithmError):
        EmaSmaCrossover(MINUTE, params)


def test_ignores_before_sma_period():
    algo = EmaSmaCrossover(MINUTE, {"ema_period": 2, "sma_period": 3})
    assert run(algo, [1.0, 2.0]) == [EvalResult.IGNORE, EvalResult.IGNORE]


def test_rising_prices_buy():
    algo = EmaSmaCrossover(MINUTE, {"ema_period": 2, "sma_period": 3})
    assert run(algo, [1.0, 2.0, 3.0, 4.0])[-1] is EvalResult.BUY


def test_falling_prices_sell():
    algo = EmaSmaCrossover(MINUTE, {"ema_period": 2, "sma_period": 3})
    assert run(algo, [4.0, 3.0, 2.0, 1.0])[-1] is EvalResult.SELL


def test_flat_prices_ignore():
    algo = EmaSmaCrossover(MINUTE, {"ema_period": 2, "sma_period": 3})
    assert set(run(algo, [5.0] * 6)) == {EvalResult.IGNORE}


def test_set_params_resets_indicators():
    algo = EmaSmaCrossover(MINUTE, {"ema_period": 2, "sma_period": 5})
    run(algo, [1.0, 2.0, 3.0, 4.0])
    new_params = {"ema_period": 2, "sma_period": 3}
    algo.set_params(new_params)
    assert algo.params == new_params
    # fresh indicators see a single value, so the averages agree
    assert algo.evaluate(Candle(close=5.0)) is EvalResult.IGNORE
    assert len(algo.data_points) == 5


def test_set_params_invalid_keeps_old():
    params = {"ema_period": 2, "sma_period": 3}
    algo = EmaSmaCrossover(MINUTE, params)
    with pytest.raises(AlgorithmError):
        algo.set_params({"ema_period": 0, "sma_period": 3})
    assert algo.params == params