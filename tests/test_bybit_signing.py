import hmac
from hashlib import sha256

import pytest

from alert_relay.errors import SigningError
from alert_relay.exchange.signing import build_signing_payload, sign_payload

_BODY = b'{"category":"linear","symbol":"BTCUSDT","side":"Buy","orderType":"Market","qty":"10","timeInForce":"GTC"}'


def test_signing_payload_concatenates_without_delimiters() -> None:
    payload = build_signing_payload(
        timestamp="1700000000000",
        api_key="key",
        recv_window="5000",
        body=b'{"a":1}',
    )
    assert payload == b'1700000000000key5000{"a":1}'


def test_sign_payload_matches_hmac_sha256() -> None:
    payload = build_signing_payload(
        timestamp="1700000000000", api_key="key", recv_window="5000", body=_BODY
    )
    expected = hmac.new(b"secret", payload, sha256).hexdigest()

    signature = sign_payload(payload, "secret")

    assert signature == expected
    assert len(signature) == 64
    assert signature == signature.lower()


def test_sign_payload_known_answers() -> None:
    # RFC 4231 test case 2.
    assert sign_payload(b"what do ya want for nothing?", "Jefe") == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )
    payload = build_signing_payload(
        timestamp="1700000000000", api_key="key", recv_window="5000", body=_BODY
    )
    assert sign_payload(payload, "secret") == (
        "3cb0d6f5ea7fa6867ee4d60455c40c467c745bcc0238563c59ffa19a1089c0b8"
    )


def test_signing_is_deterministic() -> None:
    payload = build_signing_payload(
        timestamp="1700000000000", api_key="key", recv_window="5000", body=_BODY
    )
    assert sign_payload(payload, "secret") == sign_payload(payload, "secret")


def test_changing_any_body_byte_changes_signature() -> None:
    base = sign_payload(
        build_signing_payload(timestamp="1", api_key="k", recv_window="5000", body=_BODY),
        "secret",
    )
    for i in range(len(_BODY)):
        mutated = bytearray(_BODY)
        mutated[i] ^= 0x01
        signature = sign_payload(
            build_signing_payload(
                timestamp="1", api_key="k", recv_window="5000", body=bytes(mutated)
            ),
            "secret",
        )
        assert signature != base


def test_empty_secret_is_a_signing_error() -> None:
    with pytest.raises(SigningError):
        sign_payload(b"payload", "")


def test_body_must_be_bytes() -> None:
    with pytest.raises(SigningError):
        build_signing_payload(timestamp="1", api_key="k", recv_window="5000", body="{}")  # type: ignore[arg-type]


def test_unencodable_secret_is_a_signing_error() -> None:
    with pytest.raises(SigningError):
        sign_payload(b"payload", "\ud800")
