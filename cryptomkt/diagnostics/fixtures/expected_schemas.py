"""
Expected Schemas — Defines the expected shape of CryptoMKT API responses.
Used by diagnostic suites to validate that live responses match known structure.
"""

# ── Envelope ─────────────────────────────────────────────────────────────────

ENVELOPE_REQUIRED_KEYS = ["status", "data"]

PAGINATION_FIELDS = ["previous", "limit", "page", "next"]

# ── Public ───────────────────────────────────────────────────────────────────

TICKER_FIELDS = ["high", "volume", "low", "ask", "timestamp", "bid", "last_price", "market"]

BOOK_ENTRY_FIELDS = ["timestamp", "price", "amount"]

TRADE_FIELDS = ["market_taker", "timestamp", "price", "amount", "market"]

# ── Authenticated ────────────────────────────────────────────────────────────

ORDER_FIELDS = ["status", "created_at", "amount", "price", "type", "id", "market"]

WALLET_FIELDS = ["available", "wallet", "balance"]


def missing_keys(obj: dict, keys: list[str]) -> list[str]:
    """Return the keys from `keys` that `obj` lacks."""
    return [k for k in keys if k not in obj]
