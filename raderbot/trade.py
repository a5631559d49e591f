"""Positions, closed trades and the timestamp helpers they rely on."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def now_ms() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def timestamp_to_string(ts: int) -> str:
    """Format a millisecond Unix timestamp as an ISO 8601 UTC string."""
    moment = _EPOCH + timedelta(milliseconds=int(ts))
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def string_to_timestamp(text: str) -> int:
    """Parse an ISO 8601 date-time string into a millisecond Unix timestamp.

    Strings without a zone are taken as UTC. Raises ValueError if the text
    cannot be parsed.
    """
    cleaned = text.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    moment = datetime.fromisoformat(cleaned)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // _ONE_MS


class OrderSide(Enum):
    """Side of an order."""

    BUY = "Buy"
    SELL = "Sell"

    def __str__(self) -> str:
        return self.value


def _uuid_or_none(value: Any) -> uuid.UUID | None:
    if value is None:
        return None
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


@dataclass
class Position:
    """An open trading position."""

    symbol: str
    order_side: OrderSide
    open_price: float
    quantity: float
    margin_usd: float
    leverage: int
    open_time: str = field(default_factory=lambda: timestamp_to_string(now_ms()))
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    strategy_id: uuid.UUID | None = None
    stop_loss: float | None = None

    @classmethod
    def open(
        cls,
        symbol: str,
        open_price: float,
        order_side: OrderSide,
        margin_usd: float,
        leverage: int,
        stop_loss: float | None = None,
    ) -> Position:
        """Open a position now, sizing the quantity from margin and leverage."""
        total = margin_usd * float(leverage)
        return cls(
            symbol=symbol,
            order_side=order_side,
            open_price=open_price,
            quantity=total / open_price,
            margin_usd=margin_usd,
            leverage=leverage,
            stop_loss=stop_loss,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the position."""
        return {
            "id": str(self.id),
            "symbol": self.symbol,
            "order_side": self.order_side.value,
            "open_time": self.open_time,
            "open_price": self.open_price,
            "quantity": self.quantity,
            "margin_usd": self.margin_usd,
            "leverage": self.leverage,
            "strategy_id": None if self.strategy_id is None else str(self.strategy_id),
            "stop_loss": self.stop_loss,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        """Build a position from a mapping produced by ``to_dict``."""
        return cls(
            id=uuid.UUID(str(data["id"])),
            symbol=data["symbol"],
            order_side=OrderSide(data["order_side"]),
            open_time=data["open_time"],
            open_price=float(data["open_price"]),
            quantity=float(data["quantity"]),
            margin_usd=float(data["margin_usd"]),
            leverage=int(data["leverage"]),
            strategy_id=_uuid_or_none(data.get("strategy_id")),
            stop_loss=None if data.get("stop_loss") is None else float(data["stop_loss"]),
        )


@dataclass
class TradeTx:
    """A closed position together with its closing price and time."""

    close_time: str
    close_price: float
    position: Position
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(cls, close_price: float, close_time: int, position: Position) -> TradeTx:
        """Record a trade closed at ``close_price`` at millisecond time ``close_time``."""
        return cls(
            close_time=timestamp_to_string(close_time),
            close_price=close_price,
            position=position,
        )

    def calc_profit(self) -> float:
        """Return the profit in USD; negative for a loss."""
        total_open = self.position.open_price * self.position.quantity
        total_close = self.close_price * self.position.quantity
        if self.position.order_side is OrderSide.BUY:
            return total_close - total_open
        return total_open - total_close

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the trade."""
        return {
            "id": str(self.id),
            "close_time": self.close_time,
            "close_price": self.close_price,
            "position": self.position.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TradeTx:
        """Build a trade from a mapping produced by ``to_dict``."""
        return cls(
            id=uuid.UUID(str(data["id"])),
            close_time=data["close_time"],
            close_price=float(data["close_price"]),
            position=Position.from_dict(data["position"]),
        )