from datetime import timedelta

import pytest

from raderbot.algorithms.base import AlgorithmError, Candle, EvalResult
from raderbot.algorithms.ma_three_crossover import ThreeMaCrossover

MINUTE = timedelta(minutes=1)
PARAMS = {"short_period": 2, "medium_period": 3, "long_period": 4}


def run(algo, closes):
    return [algo.evaluate(Candle(close=c)) for c in closes]


@pytest.mark.parametrize("missing", ["short_period", "medium_period", "long_period"])
def test_missing_param_raises(missing):
    params = {k: v for k, v in PARAMS.items() if k != missing}
    with pytest.raises(AlgorithmError):
        ThreeMaCrossover(MINUTE, params)


def test_ignores_before_long_period():
    algo = ThreeMaCrossover(MINUTE, PARAMS)
    assert run(algo, [1.0, 2.0, 3.0]) == [EvalResult.IGNORE] * 3


def test_rising_prices_buy():
    algo = ThreeMaCrossover(MINUTE, PARAMS)
    assert run(algo, [1.0, 2.0, 3.0, 4.0])[-1] is EvalResult.BUY


def test_falling_prices_sell():
    algo = ThreeMaCrossover(MINUTE, PARAMS)
    assert run(algo, [4.0, 3.0, 2.0, 1.0])[-1] is EvalResult.SELL


def test_flat_prices_ignore():
    algo = ThreeMaCrossover(MINUTE, PARAMS)
    assert set(run(algo, [7.0] * 6)) == {EvalResult.IGNORE}


def test_set_params_shortens_warmup():
    algo = ThreeMaCrossover(MINUTE, {"short_period": 2, "medium_period": 3, "long_period": 10})
    algo.set_params(PARAMS)
    assert algo.params == PARAMS
    rising = run(algo, [1.0, 2.0, 3.0, 4.0])
    falling = run(ThreeMaCrossover(MINUTE, PARAMS), [4.0, 3.0, 2.0, 1.0])
    assert rising[-1] is not falling[-1]
    assert rising[-1] is not EvalResult.IGNORE


def test_set_params_invalid_keeps_old():
    algo = ThreeMaCrossover(MINUTE, PARAMS)
    with pytest.raises(AlgorithmError):
        algo.set_params({"short_period": 2})
    assert algo.params == PARAMS