"""Provider-specific webhook signatures.

DingTalk signs ``"<ms timestamp>\\n<secret>"`` with the secret as the HMAC
key and percent-encodes the result for the query string. Lark uses
``"<s timestamp>\\n<secret>"`` itself as the HMAC key over an empty message.
Both use HMAC-SHA256 with base64 output.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from collections.abc import Callable
from urllib.parse import quote

from botnotify.models import (
    PROVIDER_STRATEGIES,
    KeyRole,
    Provider,
    SignaturePair,
    TimestampUnit,
)

Clock = Callable[[], float]


def current_timestamp(unit: TimestampUnit, clock: Clock = time.time) -> str:
    now = clock()
    if unit is TimestampUnit.MILLISECONDS:
        return str(int(now * 1000))
    return str(int(now))


def sign(provider: Provider, secret: str, clock: Clock = time.time) -> SignaturePair:
    """Compute the signature and timestamp for ``provider`` at send time.

    No validation happens here; callers only sign when ``secret`` is set.
    """
    strategy = PROVIDER_STRATEGIES[provider]
    timestamp = current_timestamp(strategy.timestamp_unit, clock)
    string_to_sign = f"{timestamp}\n{secret}".encode()

    if strategy.key_role is KeyRole.SECRET:
        digest = hmac.new(secret.encode(), string_to_sign, hashlib.sha256).digest()
    else:
        digest = hmac.new(string_to_sign, b"", hashlib.sha256).digest()

    signature = base64.b64encode(digest).decode()
    if strategy.percent_encode:
        signature = quote(signature, safe="")
    return SignaturePair(sign=signature, timestamp=timestamp)
