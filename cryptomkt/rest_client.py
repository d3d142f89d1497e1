"""
REST Client — Signed HTTP transport for the CryptoMKT v1 API.

Handles:
- URL construction (query params for GET, form body for POST)
- HMAC-SHA384 request signing (X-MKT-* headers)
- Bounded retries with a fixed pause on transport errors and bad statuses

Returns raw body bytes; decoding is the adapter's job.
"""

from __future__ import annotations
import time
import requests
from typing import Mapping, Optional
from urllib.parse import urlencode, urlsplit

from .config import (
    API_KEY,
    API_SECRET,
    API_URL,
    VERSION,
    MAX_RETRIES,
    RETRY_DELAY,
    REQUEST_TIMEOUT,
    HEADER_API_KEY,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    build_sign_message,
    sign_hmac_bytes,
    logger,
)
from .exceptions import (
    BodyReadError,
    CredentialsError,
    RequestBuildError,
    StatusError,
    TransportError,
)


# ── Logging ──────────────────────────────────────────────────────────────────

def _log(msg: str):
    logger.log("REST", msg)


def _warn(msg: str):
    logger.log("REST", f"⚠ {msg}")


def _err(msg: str):
    logger.log("REST", f"❌ {msg}")


# ── The Client ───────────────────────────────────────────────────────────────

class RestClient:
    """
    Transport for the CryptoMKT API.

    Holds the credentials and one pooled requests.Session. Nothing else is
    mutated after construction, so one instance can serve several threads.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key if api_key is not None else API_KEY
        self._api_secret = api_secret if api_secret is not None else API_SECRET
        self._api_secret_bytes = self._api_secret.encode("utf-8")
        self.base = (base_url or API_URL).rstrip("/") + "/"
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

        if session is None:
            session = requests.Session()
            adapter = requests.adapters.HTTPAdapter(pool_connections=10, pool_maxsize=10)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session
        _log(f"Client ready: {self.base}{VERSION} (auth={'on' if self.has_credentials else 'off'})")

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.session.close()

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key and self._api_secret)

    # ── Public Interface ─────────────────────────────────────────────────────

    def get(self, path: str, params: Optional[Mapping[str, object]] = None, auth: bool = False) -> bytes:
        """GET <base>/v1/<path>?<params>, signed when auth is set."""
        return self._request("GET", path, params, auth)

    def post(self, path: str, data: Optional[Mapping[str, object]] = None) -> bytes:
        """POST a form to <base>/v1/<path>. Always signed."""
        return self._request("POST", path, data, True)

    # ── Internals ────────────────────────────────────────────────────────────

    def _form_url(self, path: str, operation: str) -> str:
        url = self.base + VERSION + path
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise RequestBuildError(f"Parse error: {e}", operation=operation) from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise RequestBuildError(f"Parse error: invalid base URL {self.base!r}", operation=operation)
        return url

    def _sign(
        self,
        headers: dict[str, str],
        path: str,
        form: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ):
        """Attach key, signature and timestamp. The timestamp is taken now, not at request creation."""
        timestamp = int(time.time())
        message = build_sign_message(timestamp, path, form.values() if form is not None else None)

        headers[HEADER_API_KEY] = self._api_key
        if body is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            headers["Content-Length"] = str(len(body))
        headers[HEADER_SIGNATURE] = sign_hmac_bytes(self._api_secret_bytes, message.encode("utf-8"))
        headers[HEADER_TIMESTAMP] = str(timestamp)

    def _request(self, method: str, path: str, params: Optional[Mapping[str, object]], auth: bool) -> bytes:
        operation = f"{method} {path}"
        if auth and not self.has_credentials:
            raise CredentialsError("API key and secret are required", operation=operation)

        form = {k: str(v) for k, v in (params or {}).items()}
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            url = self._form_url(path, operation)

            # Body and headers
            headers: dict[str, str] = {}
            body: Optional[bytes] = None
            query = list(form.items()) if method == "GET" else None
            if method == "POST":
                body = urlencode(list(form.items())).encode("utf-8")
                self._sign(headers, path, form, body)
            elif auth:
                self._sign(headers, path)

            try:
                prepared = self.session.prepare_request(
                    requests.Request(method, url, params=query, data=body, headers=headers)
                )
            except (requests.RequestException, ValueError) as e:
                raise RequestBuildError(f"Request failed: {e}", operation=operation) from e

            # Make the request
            try:
                resp = self.session.send(prepared, timeout=self.timeout, stream=True)
            except requests.RequestException as e:
                last_error = TransportError(f"Request failed: {e}", operation=operation, attempts=attempt)
                last_error.__cause__ = e
                self._pause(attempt, last_error)
                continue

            with resp:
                # Test the response code
                if 200 <= resp.status_code < 300:
                    # Extract the body before closing and return it
                    try:
                        return resp.content
                    except requests.RequestException as e:
                        raise BodyReadError(f"Body reading failed: {e}", operation=operation) from e

                last_error = StatusError(
                    f"Request failed: {resp.status_code} {resp.reason or ''}".rstrip(),
                    operation=operation,
                    status_code=resp.status_code,
                    reason=resp.reason or "",
                    attempts=attempt,
                )

            self._pause(attempt, last_error)

        _err(f"{operation} failed after {self.max_retries} attempts: {last_error}")
        raise last_error

    def _pause(self, attempt: int, error: Exception):
        if attempt >= self.max_retries:
            return
        _warn(f"{error} (attempt {attempt}/{self.max_retries}), retrying in {self.retry_delay}s")
        time.sleep(self.retry_delay)
