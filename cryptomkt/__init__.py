"""
cryptomkt — CryptoMKT REST API Client

Usage:
    from cryptomkt import CryptoMktAdapter, Market, OrderType

    client = CryptoMktAdapter(api_key="...", api_secret="...")
    print(client.ticker(Market.ETHCLP).data[0].last_price)
    order = client.create_order(Market.ETHCLP, 0.5, 250000, OrderType.SELL)
    client.cancel_order(order.data.id)
    client.close()
"""

from .adapter import CryptoMktAdapter
from .rest_client import RestClient
from .exceptions import (
    CryptoMktError, RequestBuildError, CredentialsError, TransportError,
    StatusError, BodyReadError, DecodeError,
)
from .models import (
    Market, OrderType, WalletType, WireTable,
    MARKETS, ORDER_TYPES, WALLET_TYPES, MARKET_ASSET, MARKET_CURRENCY,
    Pagination, Ticker, OrderBookOrder, Trade, Amount, Order, Wallet, InstantQuote,
    MarketResponse, TickerResponse, OrderBookResponse, TradesResponse,
    OrdersResponse, OrderResponse, BalanceResponse,
    InstantQuoteResponse, InstantOrderResponse,
)

__all__ = [
    "CryptoMktAdapter",
    "RestClient",
    "CryptoMktError", "RequestBuildError", "CredentialsError", "TransportError",
    "StatusError", "BodyReadError", "DecodeError",
    "Market", "OrderType", "WalletType", "WireTable",
    "MARKETS", "ORDER_TYPES", "WALLET_TYPES", "MARKET_ASSET", "MARKET_CURRENCY",
    "Pagination", "Ticker", "OrderBookOrder", "Trade", "Amount", "Order", "Wallet", "InstantQuote",
    "MarketResponse", "TickerResponse", "OrderBookResponse", "TradesResponse",
    "OrdersResponse", "OrderResponse", "BalanceResponse",
    "InstantQuoteResponse", "InstantOrderResponse",
]
