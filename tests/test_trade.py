import uuid

import pytest

from raderbot.trade import (
    OrderSide,
    Position,
    TradeTx,
    now_ms,
    string_to_timestamp,
    timestamp_to_string,
)


def test_position_new():
    position = Position.open("BTCUSD", 50000.0, OrderSide.BUY, 1000.0, 10, 49000.0)

    assert position.symbol == "BTCUSD"
    assert position.open_price == 50000.0
    assert position.order_side is OrderSide.BUY
    assert position.margin_usd == 1000.0
    assert position.leverage == 10
    assert position.stop_loss == 49000.0
    assert position.quantity == pytest.approx(0.2)
    assert position.strategy_id is None
    assert string_to_timestamp(position.open_time) <= now_ms()


def test_trade_tx_new():
    close_time = now_ms()
    position = Position.open("BTCUSD", 50000.0, OrderSide.BUY, 1000.0, 10, 49000.0)

    trade_tx = TradeTx.create(51000.0, close_time, position)

    assert trade_tx.close_price == 51000.0
    assert trade_tx.close_time == timestamp_to_string(close_time)
    assert trade_tx.position == position

    another = TradeTx.create(52000.0, now_ms(), position)
    assert trade_tx.id != another.id
    assert another.id.version == 4

    assert trade_tx.calc_profit() == pytest.approx(200.0)


def test_sell_profit_is_inverted():
    position = Position.open("BTCUSD", 50000.0, OrderSide.SELL, 1000.0, 10)
    trade_tx = TradeTx.create(51000.0, now_ms(), position)
    assert trade_tx.calc_profit() == pytest.approx(-200.0)


def test_order_side_display():
    buy = Position.open("BTCUSD", 50000.0, OrderSide.BUY, 1000.0, 10, None)
    sell = Position.open("BTCUSD", 50000.0, OrderSide.SELL, 1000.0, 10, None)
    assert str(buy.order_side) == "Buy"
    assert str(sell.order_side) == "Sell"
    assert buy.to_dict()["order_side"] == "Buy"
    assert sell.to_dict()["order_side"] == "Sell"


def test_timestamp_string_pinned_and_round_trip():
    assert timestamp_to_string(0) == "1970-01-01T00:00:00.000Z"
    assert string_to_timestamp(timestamp_to_string(1700000000123)) == 1700000000123


def test_string_to_timestamp_naive_is_utc():
    assert string_to_timestamp("1970-01-01T00:00:01") == 1000


def test_string_to_timestamp_rejects_garbage():
    with pytest.raises(ValueError):
        string_to_timestamp("not a date")


def test_position_dict_round_trip():
    position = Position.open("ETHUSD", 2000.0, OrderSide.SELL, 500.0, 5, None)
    position.strategy_id = uuid.uuid4()
    data = position.to_dict()
    assert data["order_side"] == "Sell"
    assert data["strategy_id"] == str(position.strategy_id)
    assert Position.from_dict(data) == position


def test_trade_dict_round_trip():
    position = Position.open("ETHUSD", 2000.0, OrderSide.BUY, 500.0, 5, 1900.0)
    trade_tx = TradeTx.create(2100.0, 1700000000000, position)
    restored = TradeTx.from_dict(trade_tx.to_dict())
    assert restored == trade_tx
    assert restored.close_time == "2023-11-14T22:13:20.000Z"