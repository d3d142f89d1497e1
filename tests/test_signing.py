from __future__ import annotations

import hashlib
import hmac
from urllib.parse import parse_qsl, urlsplit

import pytest

from cryptomkt.config import build_sign_message, sign_hmac, sign_hmac_bytes
from cryptomkt.exceptions import CredentialsError
from cryptomkt.rest_client import RestClient

from conftest import BASE_URL, FakeSession, make_response


def test_sign_message_for_get_is_timestamp_and_path() -> None:
    assert build_sign_message(1500000000, "balance") == "1500000000/v1/balance"


def test_sign_message_appends_form_values_without_separators() -> None:
    values = ["1.0000", "ETHCLP", "250000.0000", "sell"]
    assert (
        build_sign_message(1500000000, "orders/create", values)
        == "1500000000/v1/orders/create1.0000ETHCLP250000.0000sell"
    )


def test_sign_message_uses_values_in_construction_order() -> None:
    form = {"type": "buy", "amount": "2.0000", "market": "XLMARS"}
    assert build_sign_message(7, "x", form.values()) == "7/v1/xbuy2.0000XLMARS"

    reordered = {"amount": "2.0000", "market": "XLMARS", "type": "buy"}
    assert build_sign_message(7, "x", reordered.values()) == "7/v1/x2.0000XLMARSbuy"


def test_sign_hmac_is_lowercase_sha384_hex() -> None:
    sig = sign_hmac("secret", "1500000000/v1/balance")
    expected = hmac.new(b"secret", b"1500000000/v1/balance", hashlib.sha384).hexdigest()
    assert sig == expected
    assert len(sig) == 96
    assert sig == sig.lower()
    assert sign_hmac_bytes(b"secret", b"1500000000/v1/balance") == sig


def test_signature_is_deterministic_and_input_sensitive() -> None:
    base = sign_hmac("secret", build_sign_message(100, "orders/cancel", ["M1"]))
    assert base == sign_hmac("secret", build_sign_message(100, "orders/cancel", ["M1"]))

    variants = {
        sign_hmac("secret", build_sign_message(101, "orders/cancel", ["M1"])),
        sign_hmac("secret", build_sign_message(100, "orders/status", ["M1"])),
        sign_hmac("secret", build_sign_message(100, "orders/cancel", ["M2"])),
        sign_hmac("other", build_sign_message(100, "orders/cancel", ["M1"])),
    }
    assert base not in variants
    assert len(variants) == 4


def test_authenticated_get_signs_path_only(rest: RestClient, session: FakeSession, frozen_time: int) -> None:
    session.queue(make_response(200, b"{}"))
    rest.get("orders/active", {"market": "ETHCLP", "page": 0}, auth=True)

    req = session.sent[0]
    assert req.method == "GET"
    assert req.headers["X-MKT-APIKEY"] == "my-key"
    assert req.headers["X-MKT-TIMESTAMP"] == str(frozen_time)
    assert req.headers["X-MKT-SIGNATURE"] == sign_hmac("my-secret", f"{frozen_time}/v1/orders/active")
    assert "Content-Type" not in req.headers
    assert req.body is None

    url = urlsplit(req.url)
    assert url.path == "/v1/orders/active"
    assert parse_qsl(url.query) == [("market", "ETHCLP"), ("page", "0")]


def test_public_get_has_no_signing_headers(rest: RestClient, session: FakeSession) -> None:
    session.queue(make_response(200, b"{}"))
    rest.get("ticker", {"market": "BTCCLP"})

    headers = session.sent[0].headers
    for name in ("X-MKT-APIKEY", "X-MKT-SIGNATURE", "X-MKT-TIMESTAMP"):
        assert name not in headers


def test_post_signs_form_values_and_sets_body_headers(
    rest: RestClient, session: FakeSession, frozen_time: int
) -> None:
    session.queue(make_response(200, b"{}"))
    form = {"amount": "0.5000", "market": "ETHCLP", "price": "250000.0000", "type": "sell"}
    rest.post("orders/create", form)

    req = session.sent[0]
    assert req.method == "POST"
    assert req.body == b"amount=0.5000&market=ETHCLP&price=250000.0000&type=sell"
    assert req.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert req.headers["Content-Length"] == str(len(req.body))
    assert urlsplit(req.url).query == ""

    message = f"{frozen_time}/v1/orders/create0.5000ETHCLP250000.0000sell"
    assert req.headers["X-MKT-SIGNATURE"] == sign_hmac("my-secret", message)
    assert req.headers["X-MKT-TIMESTAMP"] == str(frozen_time)


def test_post_values_are_signed_raw_but_sent_urlencoded(
    rest: RestClient, session: FakeSession, frozen_time: int
) -> None:
    session.queue(make_response(200, b"{}"))
    rest.post("orders/cancel", {"id": "M 1&2"})

    req = session.sent[0]
    assert req.body == b"id=M+1%262"
    assert req.headers["X-MKT-SIGNATURE"] == sign_hmac("my-secret", f"{frozen_time}/v1/orders/cancelM 1&2")


@pytest.mark.parametrize("key,secret", [("", "secret"), ("key", "")])
def test_signed_calls_need_both_credentials(key: str, secret: str, sleeps: list[float]) -> None:
    session = FakeSession()
    rest = RestClient(key, secret, base_url=BASE_URL, session=session)

    with pytest.raises(CredentialsError):
        rest.post("orders/cancel", {"id": "M1"})
    with pytest.raises(CredentialsError):
        rest.get("balance", auth=True)

    assert session.sent == []
    assert sleeps == []


def test_get_params_are_query_encoded_and_left_out_of_the_signature(
    rest: RestClient, session: FakeSession, frozen_time: int
) -> None:
    session.queue(make_response(200, b"{}"))
    rest.get("trades", {"market": "ETH CLP&x", "start": "2017-08-01", "page": 2}, auth=True)

    req = session.sent[0]
    url = urlsplit(req.url)
    assert url.path == "/v1/trades"
    assert "ETH CLP&x" not in url.query
    assert parse_qsl(url.query) == [("market", "ETH CLP&x"), ("start", "2017-08-01"), ("page", "2")]
    assert req.headers["X-MKT-SIGNATURE"] == sign_hmac("my-secret", f"{frozen_time}/v1/trades")


def test_get_without_params_has_no_query_string(rest: RestClient, session: FakeSession) -> None:
    session.queue(make_response(200, b"{}"))
    rest.get("market", {})

    assert session.sent[0].url == BASE_URL + "v1/market"
