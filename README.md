# raderbot

Building blocks for a trading bot. There are two parts. The first is an
account that tracks open positions and closed trades and sends orders through
an exchange client that you supply. The second is a set of signal algorithms
that turn a stream of candles into buy, sell or ignore decisions.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Positions and trades

The records live in `raderbot.trade`:

- `OrderSide` is an enum with the members `BUY` and `SELL`. Their values, and
  their `str()`, are `"Buy"` and `"Sell"`.
- `Position.open(symbol, open_price, order_side, margin_usd, leverage, stop_loss)`
  creates a position with a fresh UUID and the current time as `open_time`.
  The quantity is `margin_usd * leverage / open_price`. A position also carries
  an optional `strategy_id` and an optional `stop_loss`.
- `TradeTx.create(close_price, close_time, position)` records a closed
  position. `close_time` is given in milliseconds.
- `TradeTx.calc_profit()` returns the profit in USD. For a buy it is the close
  value minus the open value. For a sell it is the open value minus the close
  value.
- `to_dict()` and `from_dict()` convert both records to and from plain dicts
  that are ready for JSON. UUIDs are stored as strings and the order side as
  `"Buy"` or `"Sell"`.
- The timestamp helpers are:
  - `now_ms()` returns the current Unix time in milliseconds.
  - `timestamp_to_string(ts)` formats a millisecond timestamp as
    `YYYY-MM-DDTHH:MM:SS.mmmZ` in UTC.
  - `string_to_timestamp(text)` parses an ISO 8601 string into a millisecond
    timestamp. A string without a zone is read as UTC. Unparsable text raises
    `ValueError`.

## Account

`raderbot.account.Account(exchange_api, dry_run=False)` keeps the open
positions and the closed trades. It forwards orders to an `ExchangeClient`.

`ExchangeClient` is a protocol of three async methods:

- `open_position(symbol, margin_usd, leverage, order_side, open_price)` returns
  a `Position`.
- `close_position(position, close_price)` returns a `TradeTx`.
- `info()` returns a dict.

The exchange client reports failures by raising.

```python
from raderbot.account import Account
from raderbot.trade import OrderSide

async def run(client):
    account = Account(client, dry_run=True)
    position = await account.open_position(
        "BTCUSD", 1000.0, 10, OrderSide.BUY, 50000.0, None, None
    )
    trade = await account.close_position(position.id, 55000.0)
    print(trade.calc_profit())
```

The account methods are:

- `open_position(...)` asks the exchange for a position. It then sets the
  given `strategy_id` and `stop_loss` on the position, keeps it, and returns it.
- `close_position(position_id, close_price)` closes a position the account
  holds. It returns the `TradeTx`, or `None` if the id is not held.
- `positions()` and `trades()` return lists of the open positions and the
  closed trades. `get_position(position_id)` looks up one open position.
- `strategy_positions(strategy_id)` returns the open positions that carry that
  strategy id.
- `strategy_trades(strategy_id)` returns every closed trade whose position has
  any strategy id. The id passed in does not narrow the result.
- `strategy_positions_trades(strategy_id)` returns copies of both lists as a
  tuple.
- `set_exchange_api(api, dry_run)` switches to another exchange client and
  sets the dry-run mode. The `dry_run` property reports the current mode.
- `info()` returns an `AccountInfo` snapshot. Call `to_dict()` on it for a
  dict. If the exchange's `info()` raises, the exchange details are `None`.

## Algorithms

The signal algorithms are in `raderbot.algorithms`. They share the `Algorithm`
base class and the types in `raderbot.algorithms.base`:

- `Candle` is a frozen, keyword-only record with these fields: `symbol`,
  `interval`, `open`, `high`, `low`, `close`, `volume`, `open_time` and
  `close_time`.
- `EvalResult` is an enum of `BUY`, `SELL` and `IGNORE`.
- `AlgorithmError` is raised for unusable parameters.
- `parse_usize(key, params)` reads a non-negative integer from a dict. It
  accepts an int or a string of digits, and raises `AlgorithmError` otherwise.

Each algorithm is built with a `timedelta` interval and a dict of parameters.
`evaluate(kline)` records the candle and returns an `EvalResult`. The
properties `interval`, `params` and `data_points` report the state.
`set_params(params)` reconfigures a running algorithm.

| Module | Class | Parameters (defaults) |
| --- | --- | --- |
| `ma_simple` | `SimpleMovingAverage` | `sma_period` (required) |
| `ma_crossover` | `EmaSmaCrossover` | `ema_period`, `sma_period` (required, at least 1) |
| `ma_three_crossover` | `ThreeMaCrossover` | `short_period`, `medium_period`, `long_period` (required) |
| `bollinger_bands` | `BollingerBands` | `period` (20), `multiplier` (2) |
| `macd` | `Macd` | `short_ema_period` (12), `long_ema_period` (26), `signal_ema_period` (9) |
| `macd_bollinger` | `MacdBollingerBands` | `bollinger_period` (20), `bollinger_multiplier` (2.0), `short_ema_period` (12), `long_ema_period` (26), `signal_ema_period` (9) |
| `rsi` | `Rsi` | `rsi_period` (14) |
| `rsi_ema_sma` | `RsiEmaSma` | `rsi_period` (14), `short_sma_period` (5), `medium_sma_period` (12), `long_sma_period` (26), `ema_period` (9) |

Required parameters that are missing or invalid raise `AlgorithmError`, both
when the algorithm is built and in `set_params`. Optional parameters fall back
to their defaults.

Each algorithm stores at most 20160 candles, which is two weeks of one-minute
candles. Once it holds more than that, it drops the oldest 10080.

```python
from datetime import timedelta
from raderbot.algorithms.base import Candle
from raderbot.algorithms.ma_simple import SimpleMovingAverage

algo = SimpleMovingAverage(timedelta(minutes=1), {"sma_period": 3})
for close in (10.0, 11.0, 12.0, 9.0):
    print(algo.evaluate(Candle(symbol="BTCUSD", close=close)))
```

## What this package does not do

This package is a library and has no command-line program. It does not do the
following:

- It does not connect to any exchange or ships an `ExchangeClient`
  implementation.
- It does not stream market data.
- It does not run strategies or backtests.
- It does not store positions, trades or candles anywhere but in memory.
- It does not serve an HTTP API.

Those parts are left to the application that uses it.