"""Webhook delivery: POST the request and check the provider's reply.

Providers report success inside the JSON body rather than through the HTTP
status, under one of several field names depending on the provider and API
version. A reply without any of them counts as a failure.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from botnotify.errors import DeliveryError
from botnotify.models import OutgoingRequest

logger = logging.getLogger(__name__)

RESPONSE_CODE_FIELDS = ("code", "StatusCode", "errcode")
MISSING_CODE = -1

_JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def response_code(envelope: Any) -> Any:
    """Return the first code field that is present and not null, else -1."""
    if not isinstance(envelope, dict):
        return MISSING_CODE
    for field in RESPONSE_CODE_FIELDS:
        value = envelope.get(field)
        if value is not None:
            return value
    return MISSING_CODE


def is_success(code: Any) -> bool:
    if isinstance(code, bool) or not isinstance(code, (int, float)):
        return False
    return code == 0


def serialize_response(envelope: Any) -> str:
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


class Dispatcher:
    """Sends a built request to the provider webhook."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def dispatch(self, request: OutgoingRequest) -> str:
        """POST ``request`` and return the serialized provider reply.

        Raises DeliveryError on transport failure or when the reply code is
        anything other than 0.
        """
        try:
            async with httpx.AsyncClient(verify=True) as client:
                resp = await client.post(
                    request.url,
                    json=request.body,
                    headers=_JSON_HEADERS,
                    timeout=self._timeout,
                )
        except httpx.HTTPError as e:
            raise DeliveryError(f"Webhook request failed: {e}") from e

        try:
            envelope = resp.json()
        except ValueError:
            envelope = resp.text

        serialized = serialize_response(envelope)
        code = response_code(envelope)
        if not is_success(code):
            logger.error("Webhook rejected notification (code %s, HTTP %d)", code, resp.status_code)
            raise DeliveryError(serialized, response=serialized)

        logger.info("Notification delivered (HTTP %d)", resp.status_code)
        return serialized
