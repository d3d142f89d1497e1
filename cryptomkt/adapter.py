"""
Adapter — The endpoint layer.

Turns Python arguments into CryptoMKT parameter maps, sends them through the
RestClient and decodes the {"status", "data"} envelopes into typed responses.
Decoding problems surface as DecodeError and are never retried.
"""

from __future__ import annotations
from datetime import date
from typing import Any, Callable, Optional, TypeVar, Union

from .config import PAGE_LIMIT
from .exceptions import DecodeError
from .rest_client import RestClient
from .models import (
    MARKETS,
    ORDER_TYPES,
    Market,
    OrderType,
    load_envelope,
    MarketResponse,
    TickerResponse,
    OrderBookResponse,
    TradesResponse,
    OrdersResponse,
    OrderResponse,
    BalanceResponse,
    InstantQuoteResponse,
    InstantOrderResponse,
)

T = TypeVar("T")

DateLike = Union[str, date, None]


def _fmt_amount(value: float) -> str:
    """Amounts and prices go over the wire with four decimals."""
    return f"{value:.4f}"


def _fmt_date(value: DateLike) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return value.strftime("%Y-%m-%d")


def _decode(body: bytes, parse: Callable[[dict], T], operation: str) -> T:
    try:
        return parse(load_envelope(body))
    except DecodeError as e:
        raise DecodeError(f"Error decoding: {e}", operation=operation) from e


# ── The Adapter ──────────────────────────────────────────────────────────────

class CryptoMktAdapter:
    """
    Typed access to every CryptoMKT v1 endpoint.

    Public market data works without credentials; order and balance calls
    need an API key and secret.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        rest: Optional[RestClient] = None,
        **rest_options: Any,
    ):
        self.name = "CryptoMktAdapter"
        self.rest = rest or RestClient(api_key, api_secret, base_url=base_url, **rest_options)

    def __enter__(self) -> CryptoMktAdapter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.rest.close()

    # ── Public Market Data ───────────────────────────────────────────────────

    def markets(self) -> MarketResponse:
        """List every market the exchange trades."""
        body = self.rest.get("market")
        return _decode(body, MarketResponse.from_dict, "GET market")

    def ticker(self, market: Market) -> TickerResponse:
        """Snapshot of a market: high, low, volume, bid, ask, last price."""
        body = self.rest.get("ticker", {"market": MARKETS.encode(market)})
        return _decode(body, TickerResponse.from_dict, "GET ticker")

    def book(self, market: Market, order_type: OrderType, page: int = 0) -> OrderBookResponse:
        """One page of the buy or sell side of a market's order book."""
        params = {
            "market": MARKETS.encode(market),
            "type": ORDER_TYPES.encode(order_type),
            "page": page,
            "limit": PAGE_LIMIT,
        }
        body = self.rest.get("book", params)
        return _decode(body, OrderBookResponse.from_dict, "GET book")

    def buy_book(self, market: Market, page: int = 0) -> OrderBookResponse:
        return self.book(market, OrderType.BUY, page)

    def sell_book(self, market: Market, page: int = 0) -> OrderBookResponse:
        return self.book(market, OrderType.SELL, page)

    def trades(
        self,
        market: Market,
        start: DateLike = None,
        end: DateLike = None,
        page: int = 0,
    ) -> TradesResponse:
        """Public trade history; start/end are YYYY-MM-DD strings or dates."""
        params: dict[str, Any] = {"market": MARKETS.encode(market)}
        start_s, end_s = _fmt_date(start), _fmt_date(end)
        if start_s is not None:
            params["start"] = start_s
        if end_s is not None:
            params["end"] = end_s
        params["page"] = page
        params["limit"] = PAGE_LIMIT
        body = self.rest.get("trades", params)
        return _decode(body, TradesResponse.from_dict, "GET trades")

    # ── Orders ───────────────────────────────────────────────────────────────

    def active_orders(self, market: Market, page: int = 0) -> OrdersResponse:
        params = {"market": MARKETS.encode(market), "page": page, "limit": PAGE_LIMIT}
        body = self.rest.get("orders/active", params, auth=True)
        return _decode(body, OrdersResponse.from_dict, "GET orders/active")

    def executed_orders(self, market: Market, page: int = 0) -> OrdersResponse:
        params = {"market": MARKETS.encode(market), "page": page, "limit": PAGE_LIMIT}
        body = self.rest.get("orders/executed", params, auth=True)
        return _decode(body, OrdersResponse.from_dict, "GET orders/executed")

    def create_order(self, market: Market, amount: float, price: float, order_type: OrderType) -> OrderResponse:
        """Place a limit order. Form keys are alphabetical, the order the exchange signs them in."""
        data = {
            "amount": _fmt_amount(amount),
            "market": MARKETS.encode(market),
            "price": _fmt_amount(price),
            "type": ORDER_TYPES.encode(order_type),
        }
        body = self.rest.post("orders/create", data)
        return _decode(body, OrderResponse.from_dict, "POST orders/create")

    def order_status(self, order_id: str) -> OrderResponse:
        body = self.rest.get("orders/status", {"id": order_id}, auth=True)
        return _decode(body, OrderResponse.from_dict, "GET orders/status")

    def cancel_order(self, order_id: str) -> OrderResponse:
        body = self.rest.post("orders/cancel", {"id": order_id})
        return _decode(body, OrderResponse.from_dict, "POST orders/cancel")

    # ── Instant Orders ───────────────────────────────────────────────────────

    def instant_quote(self, market: Market, order_type: OrderType, amount: float) -> InstantQuoteResponse:
        """Price an order executed right now at market price, without placing it."""
        params = {
            "amount": _fmt_amount(amount),
            "market": MARKETS.encode(market),
            "type": ORDER_TYPES.encode(order_type),
        }
        body = self.rest.get("orders/instant/get", params, auth=True)
        return _decode(body, InstantQuoteResponse.from_dict, "GET orders/instant/get")

    def create_instant_order(self, market: Market, order_type: OrderType, amount: float) -> InstantOrderResponse:
        data = {
            "amount": _fmt_amount(amount),
            "market": MARKETS.encode(market),
            "type": ORDER_TYPES.encode(order_type),
        }
        body = self.rest.post("orders/instant/create", data)
        return _decode(body, InstantOrderResponse.from_dict, "POST orders/instant/create")

    # ── Account ──────────────────────────────────────────────────────────────

    def balance(self) -> BalanceResponse:
        """Available and total balance of every wallet."""
        body = self.rest.get("balance", auth=True)
        return _decode(body, BalanceResponse.from_dict, "GET balance")
