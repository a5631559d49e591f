"""Trading account holding open positions and closed trades."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from raderbot.trade import OrderSide, Position, TradeTx

log = logging.getLogger(__name__)


class ExchangeClient(Protocol):
    """Interface an exchange must offer to the account.

    Failures are reported by raising.
    """

    async def open_position(
        self,
        symbol: str,
        margin_usd: float,
        leverage: int,
        order_side: OrderSide,
        open_price: float,
    ) -> Position:
        """Open a position on the exchange."""
        ...

    async def close_position(self, position: Position, close_price: float) -> TradeTx:
        """Close a position on the exchange."""
        ...

    async def info(self) -> dict[str, Any]:
        """Describe the exchange."""
        ...


@dataclass
class AccountInfo:
    """Snapshot of an account."""

    dry_run: bool
    exchange_api: dict[str, Any] | None
    positions: list[Position] = field(default_factory=list)
    trade_transactions: list[TradeTx] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the snapshot."""
        return {
            "dry_run": self.dry_run,
            "exchange_api": self.exchange_api,
            "positions": [p.to_dict() for p in self.positions],
            "trade_transactions": [t.to_dict() for t in self.trade_transactions],
        }


class Account:
    """Open positions and closed trades placed through an exchange."""

    def __init__(self, exchange_api: ExchangeClient, dry_run: bool = False) -> None:
        self._exchange_api = exchange_api
        self._dry_run = dry_run
        self._positions: dict[uuid.UUID, Position] = {}
        self._trades: list[TradeTx] = []

    @property
    def dry_run(self) -> bool:
        """Whether the account trades without real orders."""
        return self._dry_run

    async def open_position(
        self,
        symbol: str,
        margin_usd: float,
        leverage: int,
        order_side: OrderSide,
        open_price: float,
        strategy_id: uuid.UUID | None = None,
        stop_loss: float | None = None,
    ) -> Position:
        """Open a position on the exchange and keep track of it."""
        position = await self._exchange_api.open_position(
            symbol, margin_usd, leverage, order_side, open_price
        )
        position.stop_loss = stop_loss
        position.strategy_id = strategy_id
        self._positions[position.id] = position
        return position

    async def close_position(
        self, position_id: uuid.UUID, close_price: float
    ) -> TradeTx | None:
        """Close a held position; return the trade, or None if it is not held."""
        position = self._positions.get(position_id)
        if position is None:
            return None
        trade_tx = await self._exchange_api.close_position(replace(position), close_price)
        del self._positions[position_id]
        self._trades.append(trade_tx)
        return trade_tx

    def positions(self) -> list[Position]:
        """Return the open positions."""
        return list(self._positions.values())

    def trades(self) -> list[TradeTx]:
        """Return the closed trades."""
        return list(self._trades)

    def strategy_positions_trades(
        self, strategy_id: uuid.UUID
    ) -> tuple[list[Position], list[TradeTx]]:
        """Return copies of the strategy's open positions and its trades."""
        positions = [replace(p) for p in self.strategy_positions(strategy_id)]
        trades = [replace(t) for t in self.strategy_trades(strategy_id)]
        return positions, trades

    def strategy_positions(self, strategy_id: uuid.UUID) -> list[Position]:
        """Return the open positions opened by the given strategy."""
        return [p for p in self._positions.values() if p.strategy_id == strategy_id]

    def strategy_trades(self, strategy_id: uuid.UUID) -> list[TradeTx]:
        """Return the closed trades whose positions belong to any strategy.

        The given id is not used to narrow the result.
        """
        return [t for t in self._trades if t.position.strategy_id is not None]

    def set_exchange_api(self, api: ExchangeClient, dry_run: bool) -> None:
        """Switch to another exchange and dry-run mode."""
        self._dry_run = dry_run
        self._exchange_api = api

    async def info(self) -> AccountInfo:
        """Return a snapshot of the account; exchange details are None on failure."""
        try:
            exchange_info = await self._exchange_api.info()
        except Exception as exc:  # the exchange may fail in any way
            log.info("Unable to get exchange info: %s", exc)
            exchange_info = None
        return AccountInfo(
            dry_run=self._dry_run,
            exchange_api=exchange_info,
            positions=self.positions(),
            trade_transactions=self.trades(),
        )

    def get_position(self, position_id: uuid.UUID) -> Position | None:
        """Return the open position with this id, if any."""
        return self._positions.get(position_id)