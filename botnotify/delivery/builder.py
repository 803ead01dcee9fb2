"""Assemble the final webhook URL and body for a resolved notification."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import urlencode

from botnotify.errors import ConfigError
from botnotify.models import (
    PROVIDER_STRATEGIES,
    OutgoingRequest,
    ResolvedOptions,
    SignaturePlacement,
)
from botnotify.signing.signer import Clock, sign

logger = logging.getLogger(__name__)


def build_url(options: ResolvedOptions, clock: Clock = time.time) -> str:
    strategy = PROVIDER_STRATEGIES[options.provider]
    if strategy.placement is not SignaturePlacement.QUERY or not options.secret:
        return options.webhook

    pair = sign(options.provider, options.secret, clock)
    # sign is already percent-encoded; keep "%" so it stays single-encoded,
    # the form DingTalk verifies, rather than running it through urlencode again
    query = urlencode({"timestamp": pair.timestamp, "sign": pair.sign}, safe="%")
    return f"{options.webhook}&{query}"


def build_body(options: ResolvedOptions, clock: Clock = time.time) -> Any:
    strategy = PROVIDER_STRATEGIES[options.provider]
    if strategy.placement is not SignaturePlacement.BODY or not options.secret:
        return options.payload

    if not isinstance(options.payload, dict):
        raise ConfigError(
            f"Payload for {options.provider.value} must be a JSON object "
            "when a secret is set",
        )

    pair = sign(options.provider, options.secret, clock)
    body: dict[str, Any] = {"timestamp": pair.timestamp, "sign": pair.sign}
    collisions = [key for key in options.payload if key in body]
    if collisions:
        logger.warning(
            "Payload keys %s are reserved for the signature and were dropped",
            ", ".join(collisions),
        )
    body.update({k: v for k, v in options.payload.items() if k not in body})
    return body


def build_request(options: ResolvedOptions, clock: Clock = time.time) -> OutgoingRequest:
    """Sign and assemble the request; call this right before sending."""
    return OutgoingRequest(url=build_url(options, clock), body=build_body(options, clock))
