"""
Mock Responses — Sample CryptoMKT API responses for offline/unit testing.
Can be used to validate parsing logic without hitting the live API.
"""

MOCK_MARKETS_RESPONSE = {
    "status": "success",
    "data": ["ETHCLP", "ETHARS", "ETHEUR", "ETHBRL", "XLMCLP", "BTCCLP"],
}

MOCK_TICKER_RESPONSE = {
    "status": "success",
    "data": [
        {
            "high": "263500",
            "volume": "1113.1284",
            "low": "249000",
            "ask": "260450",
            "timestamp": "2017-08-29T17:59:23.542137",
            "bid": "259000",
            "last_price": "260450",
            "market": "ETHCLP",
        }
    ],
}

MOCK_BOOK_RESPONSE = {
    "status": "success",
    "pagination": {"previous": "null", "limit": 100, "page": 0, "next": 1},
    "data": [
        {"timestamp": "2017-08-31T10:14:45.926582", "price": "258000", "amount": "1.4000"},
        {"timestamp": "2017-08-31T10:11:25.118417", "price": "257500", "amount": "0.5124"},
    ],
}

MOCK_TRADES_RESPONSE = {
    "status": "success",
    "pagination": {"previous": "3", "limit": 100, "page": 4, "next": "null"},
    "data": [
        {
            "market_taker": "sell",
            "timestamp": "2017-08-31T12:58:21.442127",
            "price": "259000",
            "amount": "0.0450",
            "market": "ETHCLP",
        },
        {
            "market_taker": "buy",
            "timestamp": "Aug 31 12:51:10.103422",
            "price": "260450",
            "amount": "0.2000",
            "market": "ETHCLP",
        },
    ],
}

MOCK_ACTIVE_ORDERS_RESPONSE = {
    "status": "success",
    "pagination": {"previous": "null", "limit": 100, "page": 0, "next": "null"},
    "data": [
        {
            "status": "active",
            "created_at": "2017-09-01T14:01:41.357485",
            "amount": {"original": "1.4044", "remaining": "1.4044"},
            "price": "7120",
            "type": "buy",
            "id": "M103966",
            "market": "ETHCLP",
            "updated_at": "2017-09-01T14:01:41.357485",
        }
    ],
}

MOCK_EXECUTED_ORDERS_RESPONSE = {
    "status": "success",
    "pagination": {"previous": "null", "limit": 100, "page": 0, "next": "null"},
    "data": [
        {
            "status": "executed",
            "created_at": "2017-08-31T21:37:42.282102",
            "amount": {"original": "0.0300", "executed": "0.0300"},
            "execution_price": "264000",
            "avg_execution_price": "264000",
            "price": "263500",
            "type": "sell",
            "id": "M103959",
            "market": "ETHCLP",
            "updated_at": "2017-08-31T22:43:03.072318",
        }
    ],
}

MOCK_ORDER_RESPONSE = {
    "status": "success",
    "data": {
        "status": "active",
        "created_at": "2017-09-01T14:01:41.357485",
        "amount": {"original": "0.5000", "remaining": "0.5000"},
        "price": "250000",
        "type": "sell",
        "id": "M103967",
        "market": "ETHCLP",
        "updated_at": "2017-09-01T14:01:41.357485",
    },
}

MOCK_BALANCE_RESPONSE = {
    "status": "success",
    "data": [
        {"available": "120347", "wallet": "CLP", "balance": "120347"},
        {"available": "10.3399", "wallet": "ETH", "balance": "11.3399"},
    ],
}

MOCK_INSTANT_QUOTE_RESPONSE = {
    "status": "success",
    "data": {"obtained": "0.0384", "required": "10000"},
}

MOCK_INSTANT_ORDER_RESPONSE = {
    "status": "success",
    "data": "orden creada correctamente",
}
