"""
Config — Loads .env credentials and exposes API endpoints.
Also home of the HMAC-SHA384 signing primitives and the async logger.
"""

import os
import hmac
import hashlib
import queue
import threading
from pathlib import Path
from typing import Iterable, Optional
from dotenv import load_dotenv

# ── Load .env (package dir only) ─────────────────────────────────────────────

_env_path = Path(__file__).parent / ".env"


def _load_env() -> bool:
    return load_dotenv(_env_path)


_load_env()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        print(f"[Config] ⚠ {name}={raw!r} is not a positive number, using {default}")
        return default
    return value


# ── Credential Resolution ────────────────────────────────────────────────────

API_KEY = os.getenv("CRYPTOMKT_API_KEY", "").strip()
API_SECRET = os.getenv("CRYPTOMKT_API_SECRET", "").strip()

# ── Endpoints ────────────────────────────────────────────────────────────────

API_URL = os.getenv("CRYPTOMKT_API_URL", "https://api.cryptomkt.com/").strip()
VERSION = "v1/"

PAGE_LIMIT = 100
MAX_RETRIES = 5
RETRY_DELAY = 2.0
REQUEST_TIMEOUT = _env_float("CRYPTOMKT_TIMEOUT", 10.0)

# ── HMAC Signing ─────────────────────────────────────────────────────────────

HEADER_API_KEY = "X-MKT-APIKEY"
HEADER_SIGNATURE = "X-MKT-SIGNATURE"
HEADER_TIMESTAMP = "X-MKT-TIMESTAMP"


def build_sign_message(timestamp: int, path: str, form_values: Optional[Iterable[str]] = None) -> str:
    """
    Canonical string to sign: "<timestamp>/v1/<path>" followed by the raw
    form values (POST only), in iteration order, without separators.
    """
    message = str(int(timestamp)) + "/" + VERSION + path
    if form_values is not None:
        message += "".join(form_values)
    return message


def sign_hmac(secret: str, message: str) -> str:
    """HMAC-SHA384 signature (lowercase hex)."""
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha384,
    ).hexdigest()


def sign_hmac_bytes(secret_bytes: bytes, message_bytes: bytes) -> str:
    """HMAC-SHA384 signature using pre-encoded bytes."""
    return hmac.new(
        secret_bytes,
        message_bytes,
        hashlib.sha384,
    ).hexdigest()


# ── Async Logger ─────────────────────────────────────────────────────────────

class AsyncLogger:
    def __init__(self):
        self._q = queue.Queue()
        self._t = threading.Thread(target=self._worker, daemon=True)
        self._t.start()
        self.enabled = os.getenv("CRYPTOMKT_LOG", "1").strip() not in ("0", "false", "no")

    def _worker(self):
        while True:
            msg = self._q.get()
            print(msg, flush=True)
            self._q.task_done()

    def log(self, prefix, msg):
        if self.enabled:
            self._q.put(f"[{prefix}] {msg}")

    def flush(self):
        """Block until every queued line has been printed."""
        self._q.join()

logger = AsyncLogger()


# ── Validation ───────────────────────────────────────────────────────────────


def validate_credentials(api_key: str = API_KEY, api_secret: str = API_SECRET) -> bool:
    if not api_key or not api_secret:
        print("[Config] ⚠ No API Credentials. Authenticated suites will be skipped.")
        return False
    return True


def masked(s: str) -> str:
    return s[:6] + "..." + s[-4:] if len(s) > 10 else s


def print_config():
    print()
    print(f"  ┌─ CryptoMKT Client Config ─────────────────────┐")
    print(f"  │  REST:      {API_URL + VERSION:<34}│")
    print(f"  │  Timeout:   {REQUEST_TIMEOUT:<34}│")
    print(f"  │  Retries:   {MAX_RETRIES:<34}│")
    print(f"  │  API Key:   {masked(API_KEY):<34}│")
    print(f"  └───────────────────────────────────────────────┘")
    print()
