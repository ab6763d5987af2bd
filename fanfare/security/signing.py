"""HMAC request signing for calls to the parent service.

Signature = base64(HMAC-SHA256(secret, timestamp + body + endpoint_path)).
The parent service recomputes the same digest from the ``X-Timestamp``
header, the raw request body and the request path.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timezone


def iso_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_signature(timestamp: str, body: str, endpoint: str, secret_key: str) -> str:
    """Compute the base64-encoded HMAC-SHA256 signature for a request."""
    if not secret_key:
        raise ValueError("secret_key must not be empty")
    message = f"{timestamp}{body}{endpoint}".encode("utf-8")
    digest = hmac.new(secret_key.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(
    signature: str, timestamp: str, body: str, endpoint: str, secret_key: str
) -> bool:
    """Return ``True`` if *signature* matches the request, in constant time."""
    expected = generate_signature(timestamp, body, endpoint, secret_key)
    return hmac.compare_digest(expected, signature)
