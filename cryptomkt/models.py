"""
Models — Enums, wire tables and response dataclasses for the CryptoMKT API.

The API speaks in strings: markets ("ETHCLP"), sides ("buy"), currencies
("CLP"), prices ("7120.5") and timestamps ("2017-09-01T14:01:41.357485").
Everything here turns those strings into typed values, and back for enums.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Iterator, Optional, TypeVar

import orjson as json

from .config import logger
from .exceptions import DecodeError


def _warn(msg: str):
    logger.log("MODELS", f"⚠ {msg}")


# ── Enums ────────────────────────────────────────────────────────────────────

class Market(Enum):
    ETHARS = "ETHARS"
    ETHEUR = "ETHEUR"
    ETHBRL = "ETHBRL"
    XLMARS = "XLMARS"
    XLMEUR = "XLMEUR"
    XLMBRL = "XLMBRL"
    BTCARS = "BTCARS"
    BTCEUR = "BTCEUR"
    BTCBRL = "BTCBRL"
    ETHCLP = "ETHCLP"
    XLMCLP = "XLMCLP"
    BTCCLP = "BTCCLP"

    def __str__(self) -> str:
        return self.value

    @property
    def asset(self) -> WalletType:
        """The traded asset (ETH for ETHCLP)."""
        return MARKET_ASSET[self]

    @property
    def currency(self) -> WalletType:
        """The quote currency (CLP for ETHCLP)."""
        return MARKET_CURRENCY[self]


class OrderType(Enum):
    BUY = "buy"
    SELL = "sell"

    def __str__(self) -> str:
        return self.value


class WalletType(Enum):
    ARS = "ARS"
    BRL = "BRL"
    CLP = "CLP"
    EUR = "EUR"
    ETH = "ETH"
    XLM = "XLM"
    BTC = "BTC"

    def __str__(self) -> str:
        return self.value


# ── Wire Tables ──────────────────────────────────────────────────────────────

E = TypeVar("E", bound=Enum)


class WireTable(Generic[E]):
    """
    Read-only bidirectional map between enum members and their wire strings.

    The first member of the enum is the table's zero member. Lenient decoding
    of an unknown string returns it (and logs a warning) instead of failing,
    matching what the exchange's reference client does. Pass strict=True to
    get a DecodeError instead.
    """

    __slots__ = ("name", "zero", "_to_wire", "_from_wire")

    def __init__(self, enum_cls: type[E]):
        self.name = enum_cls.__name__
        self.zero: E = next(iter(enum_cls))
        self._to_wire = MappingProxyType({m: m.value for m in enum_cls})
        self._from_wire = MappingProxyType({m.value: m for m in enum_cls})

    def encode(self, member: E) -> str:
        try:
            return self._to_wire[member]
        except KeyError:
            raise ValueError(f"{member!r} is not a {self.name}") from None

    def decode(self, raw: Any, strict: bool = False) -> E:
        if not isinstance(raw, str):
            raise DecodeError(f"{self.name}: expected a string, got {type(raw).__name__}")
        member = self._from_wire.get(raw)
        if member is None:
            if strict:
                raise DecodeError(f"{self.name}: unknown value {raw!r}")
            _warn(f"Unknown {self.name} {raw!r}, decoding as {self.zero.name}")
            return self.zero
        return member

    def __contains__(self, raw: object) -> bool:
        return raw in self._from_wire

    def __iter__(self) -> Iterator[E]:
        return iter(self._to_wire)

    def __len__(self) -> int:
        return len(self._to_wire)


MARKETS: WireTable[Market] = WireTable(Market)
ORDER_TYPES: WireTable[OrderType] = WireTable(OrderType)
WALLET_TYPES: WireTable[WalletType] = WireTable(WalletType)

MARKET_ASSET = MappingProxyType({
    Market.ETHARS: WalletType.ETH,
    Market.ETHBRL: WalletType.ETH,
    Market.ETHCLP: WalletType.ETH,
    Market.ETHEUR: WalletType.ETH,
    Market.XLMARS: WalletType.XLM,
    Market.XLMBRL: WalletType.XLM,
    Market.XLMCLP: WalletType.XLM,
    Market.XLMEUR: WalletType.XLM,
    Market.BTCARS: WalletType.BTC,
    Market.BTCBRL: WalletType.BTC,
    Market.BTCCLP: WalletType.BTC,
    Market.BTCEUR: WalletType.BTC,
})

MARKET_CURRENCY = MappingProxyType({
    Market.ETHARS: WalletType.ARS,
    Market.ETHBRL: WalletType.BRL,
    Market.ETHCLP: WalletType.CLP,
    Market.ETHEUR: WalletType.EUR,
    Market.XLMARS: WalletType.ARS,
    Market.XLMBRL: WalletType.BRL,
    Market.XLMCLP: WalletType.CLP,
    Market.XLMEUR: WalletType.EUR,
    Market.BTCARS: WalletType.ARS,
    Market.BTCBRL: WalletType.BRL,
    Market.BTCCLP: WalletType.CLP,
    Market.BTCEUR: WalletType.EUR,
})


# ── Field Parsers ────────────────────────────────────────────────────────────

# Go's StampMicro carries no year; "1900 " is prepended before parsing.
_STAMP_MICRO = "%Y %b %d %H:%M:%S.%f"
_ISO_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f", "%Y-%m-%dT%H:%M:%S")


def parse_time(raw: Any) -> datetime:
    """Parse an API timestamp: StampMicro first, then ISO without offset."""
    if not isinstance(raw, str):
        raise DecodeError(f"timestamp: expected a string, got {type(raw).__name__}")
    try:
        return datetime.strptime("1900 " + raw, _STAMP_MICRO).replace(tzinfo=timezone.utc)
    except ValueError:
        pass
    for fmt in _ISO_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise DecodeError(f"timestamp: unsupported format {raw!r}")


def parse_cursor(raw: Any) -> int:
    """
    Pagination cursor: the API sends either a number or a string, and uses
    the string "null" when there is no previous/next page. Unparsable
    strings and JSON null both mean 0.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise DecodeError("cursor: expected a number or string, got bool")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return 0
    raise DecodeError(f"cursor: expected a number or string, got {type(raw).__name__}")


def _get(d: dict, key: str) -> Any:
    try:
        return d[key]
    except KeyError:
        raise DecodeError(f"missing field {key!r}") from None


def _obj(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise DecodeError(f"{what}: expected an object, got {type(raw).__name__}")
    return raw


def _list(raw: Any, what: str) -> list:
    if not isinstance(raw, list):
        raise DecodeError(f"{what}: expected a list, got {type(raw).__name__}")
    return raw


def _str(d: dict, key: str) -> str:
    v = _get(d, key)
    if not isinstance(v, str):
        raise DecodeError(f"{key}: expected a string, got {type(v).__name__}")
    return v


def _to_float(v: Any, key: str) -> float:
    if isinstance(v, bool):
        raise DecodeError(f"{key}: expected a numeric string, got bool")
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v)
        except ValueError:
            raise DecodeError(f"{key}: not a number: {v!r}") from None
    raise DecodeError(f"{key}: expected a numeric string, got {type(v).__name__}")


def _float(d: dict, key: str) -> float:
    return _to_float(_get(d, key), key)


def _opt_float(d: dict, key: str) -> float:
    v = d.get(key)
    if v is None or v == "":
        return 0.0
    return _to_float(v, key)


def _int(d: dict, key: str, default: int = 0) -> int:
    v = d.get(key, default)
    if v is None:
        return default
    if isinstance(v, bool) or not isinstance(v, (int, str)):
        raise DecodeError(f"{key}: expected an integer, got {type(v).__name__}")
    try:
        return int(v)
    except ValueError:
        raise DecodeError(f"{key}: not an integer: {v!r}") from None


def load_envelope(body: bytes) -> dict:
    """Parse a raw response body into its {"status", "data"} object."""
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise DecodeError(f"malformed JSON: {e}") from e
    return _obj(payload, "response")


# ── Domain Objects ───────────────────────────────────────────────────────────

@dataclass(slots=True)
class Pagination:
    previous: int = 0
    limit: int = 0
    page: int = 0
    next: int = 0

    @classmethod
    def from_dict(cls, raw: Any) -> Pagination:
        if raw is None:
            return cls()
        d = _obj(raw, "pagination")
        return cls(
            previous=parse_cursor(d.get("previous")),
            limit=_int(d, "limit"),
            page=_int(d, "page"),
            next=parse_cursor(d.get("next")),
        )


@dataclass(slots=True)
class Ticker:
    market: Market
    timestamp: datetime
    high: float = 0.0
    low: float = 0.0
    volume: float = 0.0
    ask: float = 0.0
    bid: float = 0.0
    last_price: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> Ticker:
        d = _obj(raw, "ticker")
        return cls(
            market=MARKETS.decode(_get(d, "market")),
            timestamp=parse_time(_get(d, "timestamp")),
            high=_float(d, "high"),
            low=_float(d, "low"),
            volume=_float(d, "volume"),
            ask=_float(d, "ask"),
            bid=_float(d, "bid"),
            last_price=_float(d, "last_price"),
        )


@dataclass(slots=True)
class OrderBookOrder:
    timestamp: datetime
    price: float = 0.0
    amount: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> OrderBookOrder:
        d = _obj(raw, "book entry")
        return cls(
            timestamp=parse_time(_get(d, "timestamp")),
            price=_float(d, "price"),
            amount=_float(d, "amount"),
        )


@dataclass(slots=True)
class Trade:
    market: Market
    market_taker: OrderType
    timestamp: datetime
    price: float = 0.0
    amount: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> Trade:
        d = _obj(raw, "trade")
        return cls(
            market=MARKETS.decode(_get(d, "market")),
            market_taker=ORDER_TYPES.decode(_get(d, "market_taker")),
            timestamp=parse_time(_get(d, "timestamp")),
            price=_float(d, "price"),
            amount=_float(d, "amount"),
        )


@dataclass(slots=True)
class Amount:
    original: float = 0.0
    remaining: float = 0.0   # active orders only
    executed: float = 0.0    # executed orders only

    @classmethod
    def from_dict(cls, raw: Any) -> Amount:
        d = _obj(raw, "amount")
        return cls(
            original=_float(d, "original"),
            remaining=_opt_float(d, "remaining"),
            executed=_opt_float(d, "executed"),
        )


@dataclass(slots=True)
class Order:
    id: str
    market: Market
    type: OrderType
    status: str
    price: float
    amount: Amount
    created_at: datetime
    updated_at: Optional[datetime] = None
    execution_price: float = 0.0
    avg_execution_price: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> Order:
        d = _obj(raw, "order")
        updated = d.get("updated_at")
        return cls(
            id=_str(d, "id"),
            market=MARKETS.decode(_get(d, "market")),
            type=ORDER_TYPES.decode(_get(d, "type")),
            status=_str(d, "status"),
            price=_float(d, "price"),
            amount=Amount.from_dict(_get(d, "amount")),
            created_at=parse_time(_get(d, "created_at")),
            updated_at=parse_time(updated) if updated is not None else None,
            execution_price=_opt_float(d, "execution_price"),
            avg_execution_price=_opt_float(d, "avg_execution_price"),
        )


@dataclass(slots=True)
class Wallet:
    wallet: WalletType
    available: float = 0.0
    balance: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> Wallet:
        d = _obj(raw, "wallet")
        return cls(
            wallet=WALLET_TYPES.decode(_get(d, "wallet")),
            available=_float(d, "available"),
            balance=_float(d, "balance"),
        )


@dataclass(slots=True)
class InstantQuote:
    obtained: float = 0.0   # what the order would yield
    required: float = 0.0   # what the order would cost

    @classmethod
    def from_dict(cls, raw: Any) -> InstantQuote:
        d = _obj(raw, "instant quote")
        return cls(obtained=_float(d, "obtained"), required=_float(d, "required"))


# ── Response Envelopes ───────────────────────────────────────────────────────

@dataclass(slots=True)
class MarketResponse:
    status: str = ""
    data: list[Market] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> MarketResponse:
        return cls(
            status=_str(d, "status"),
            data=[MARKETS.decode(m) for m in _list(_get(d, "data"), "data")],
        )


@dataclass(slots=True)
class TickerResponse:
    status: str = ""
    data: list[Ticker] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> TickerResponse:
        return cls(
            status=_str(d, "status"),
            data=[Ticker.from_dict(t) for t in _list(_get(d, "data"), "data")],
        )


@dataclass(slots=True)
class OrderBookResponse:
    status: str = ""
    pagination: Pagination = field(default_factory=Pagination)
    data: list[OrderBookOrder] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> OrderBookResponse:
        return cls(
            status=_str(d, "status"),
            pagination=Pagination.from_dict(d.get("pagination")),
            data=[OrderBookOrder.from_dict(o) for o in _list(_get(d, "data"), "data")],
        )


@dataclass(slots=True)
class TradesResponse:
    status: str = ""
    pagination: Pagination = field(default_factory=Pagination)
    data: list[Trade] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> TradesResponse:
        return cls(
            status=_str(d, "status"),
            pagination=Pagination.from_dict(d.get("pagination")),
            data=[Trade.from_dict(t) for t in _list(_get(d, "data"), "data")],
        )


@dataclass(slots=True)
class OrdersResponse:
    status: str = ""
    pagination: Pagination = field(default_factory=Pagination)
    data: list[Order] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> OrdersResponse:
        return cls(
            status=_str(d, "status"),
            pagination=Pagination.from_dict(d.get("pagination")),
            data=[Order.from_dict(o) for o in _list(_get(d, "data"), "data")],
        )


@dataclass(slots=True)
class OrderResponse:
    status: str
    data: Order

    @classmethod
    def from_dict(cls, d: dict) -> OrderResponse:
        return cls(status=_str(d, "status"), data=Order.from_dict(_get(d, "data")))


@dataclass(slots=True)
class BalanceResponse:
    status: str = ""
    data: list[Wallet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> BalanceResponse:
        return cls(
            status=_str(d, "status"),
            data=[Wallet.from_dict(w) for w in _list(_get(d, "data"), "data")],
        )

    def wallet(self, currency: WalletType) -> Optional[Wallet]:
        for w in self.data:
            if w.wallet is currency:
                return w
        return None


@dataclass(slots=True)
class InstantQuoteResponse:
    status: str
    data: InstantQuote

    @classmethod
    def from_dict(cls, d: dict) -> InstantQuoteResponse:
        return cls(status=_str(d, "status"), data=InstantQuote.from_dict(_get(d, "data")))


@dataclass(slots=True)
class InstantOrderResponse:
    """The exchange answers an instant order with a confirmation message, kept as-is."""
    status: str
    data: Any = None

    @classmethod
    def from_dict(cls, d: dict) -> InstantOrderResponse:
        return cls(status=_str(d, "status"), data=_get(d, "data"))
