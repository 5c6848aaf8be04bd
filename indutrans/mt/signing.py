"""TC3-HMAC-SHA256 request signing for Tencent Cloud APIs."""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Any, Dict

ALGORITHM = "TC3-HMAC-SHA256"
REQUEST_SCOPE = "tc3_request"
SIGNED_HEADERS = "content-type;host"
CONTENT_TYPE = "application/json"


def sha256_hex(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def utc_date(timestamp: int) -> str:
    return time.strftime("%Y-%m-%d", time.gmtime(timestamp))


def dump_payload(payload: Dict[str, Any]) -> str:
    """Serialize the JSON body exactly once; the signed hash must match the bytes sent."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def canonical_request(host: str, payload: str) -> str:
    canonical_headers = f"content-type:{CONTENT_TYPE}\nhost:{host}\n"
    return "\n".join(["POST", "/", "", canonical_headers, SIGNED_HEADERS, sha256_hex(payload)])


def credential_scope(date: str, service: str) -> str:
    return f"{date}/{service}/{REQUEST_SCOPE}"


def string_to_sign(timestamp: int, scope: str, canonical: str) -> str:
    return "\n".join([ALGORITHM, str(timestamp), scope, sha256_hex(canonical)])


def derive_signing_key(secret_key: str, date: str, service: str) -> bytes:
    k_date = hmac_sha256(("TC3" + secret_key).encode("utf-8"), date)
    k_service = hmac_sha256(k_date, service)
    return hmac_sha256(k_service, REQUEST_SCOPE)


@dataclass
class SignedRequest:
    authorization: str
    timestamp: int
    date: str
    scope: str
    signature: str


def sign_request(
    *,
    secret_id: str,
    secret_key: str,
    service: str,
    host: str,
    payload: str,
    timestamp: int,
) -> SignedRequest:
    date = utc_date(timestamp)
    scope = credential_scope(date, service)
    to_sign = string_to_sign(timestamp, scope, canonical_request(host, payload))
    signature = hmac.new(
        derive_signing_key(secret_key, date, service), to_sign.encode("utf-8"), hashlib.sha256
    ).hexdigest()
    authorization = (
        f"{ALGORITHM} Credential={secret_id}/{scope}, "
        f"SignedHeaders={SIGNED_HEADERS}, Signature={signature}"
    )
    return SignedRequest(
        authorization=authorization, timestamp=timestamp, date=date, scope=scope, signature=signature
    )


__all__ = [
    "ALGORITHM",
    "SIGNED_HEADERS",
    "SignedRequest",
    "canonical_request",
    "credential_scope",
    "derive_signing_key",
    "dump_payload",
    "hmac_sha256",
    "sha256_hex",
    "sign_request",
    "string_to_sign",
    "utc_date",
]
