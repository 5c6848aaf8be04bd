from __future__ import annotations

import hashlib
import hmac
import re

from indutrans.mt.signing import canonical_request, dump_payload, sign_request, utc_date

TS = 1551113065  # 2019-02-25 16:44:25 UTC


def _sign(payload: str, secret_key: str = "Gu5t9xGARNpq86cd98joQYCN3EXAMPLE"):
    return sign_request(
        secret_id="AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE",
        secret_key=secret_key,
        service="tmt",
        host="tmt.tencentcloudapi.com",
        payload=payload,
        timestamp=TS,
    )


def test_date_is_utc() -> None:
    assert utc_date(TS) == "2019-02-25"
    assert utc_date(0) == "1970-01-01"


def test_payload_is_compact_and_keeps_unicode() -> None:
    assert dump_payload({"Target": "en", "SourceTextList": ["电机"]}) == '{"Target":"en","SourceTextList":["电机"]}'


def test_canonical_request_layout() -> None:
    payload = "{}"
    lines = canonical_request("tmt.tencentcloudapi.com", payload).split("\n")
    assert lines[:3] == ["POST", "/", ""]
    assert lines[3] == "content-type:application/json"
    assert lines[4] == "host:tmt.tencentcloudapi.com"
    assert lines[5] == ""
    assert lines[6] == "content-type;host"
    assert lines[7] == hashlib.sha256(b"{}").hexdigest()


def test_authorization_header_shape() -> None:
    signed = _sign('{"a":1}')
    assert signed.scope == "2019-02-25/tmt/tc3_request"
    assert re.fullmatch(r"[0-9a-f]{64}", signed.signature)
    assert signed.authorization == (
        "TC3-HMAC-SHA256 Credential=AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE/2019-02-25/tmt/tc3_request, "
        f"SignedHeaders=content-type;host, Signature={signed.signature}"
    )


def test_signature_matches_independent_derivation() -> None:
    payload = dump_payload({"Source": "auto", "Target": "vi", "ProjectId": 0, "SourceTextList": ["急停"]})
    secret = "s3cr3t"

    def h(key: bytes, msg: str) -> bytes:
        return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()

    canon = canonical_request("tmt.tencentcloudapi.com", payload)
    to_sign = "\n".join(
        [
            "TC3-HMAC-SHA256",
            str(TS),
            "2019-02-25/tmt/tc3_request",
            hashlib.sha256(canon.encode("utf-8")).hexdigest(),
        ]
    )
    key = h(h(h(("TC3" + secret).encode("utf-8"), "2019-02-25"), "tmt"), "tc3_request")
    expected = hmac.new(key, to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    assert _sign(payload, secret).signature == expected


def test_signature_depends_on_payload_and_secret() -> None:
    base = _sign('{"a":1}').signature
    assert _sign('{"a":1}').signature == base
    assert _sign('{"a":2}').signature != base
    assert _sign('{"a":1}', secret_key="other").signature != base
