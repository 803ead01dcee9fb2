"""Notification client: validate, resolve, sign and deliver in one run."""

from __future__ import annotations

import logging
import time

from botnotify.config.validator import resolve_options
from botnotify.delivery.builder import build_request
from botnotify.delivery.dispatcher import Dispatcher
from botnotify.models import InvocationConfig, ResolvedOptions
from botnotify.signing.signer import Clock
from botnotify.template.github import ContentFetcher

logger = logging.getLogger(__name__)


class NotifyClient:
    """Delivers one resolved notification to its provider webhook."""

    def __init__(
        self,
        options: ResolvedOptions,
        dispatcher: Dispatcher | None = None,
        clock: Clock = time.time,
    ) -> None:
        self.options = options
        self._dispatcher = dispatcher or Dispatcher()
        self._clock = clock

    @classmethod
    async def from_config(
        cls,
        config: InvocationConfig,
        fetcher: ContentFetcher | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> NotifyClient:
        options = await resolve_options(config, fetcher)
        return cls(options, dispatcher=dispatcher)

    async def notify(self) -> str:
        """Send the notification and return the provider's serialized reply."""
        # Signed here so the timestamp reflects send time.
        request = build_request(self.options, self._clock)
        logger.info("Sending %s notification", self.options.provider.value)
        return await self._dispatcher.dispatch(request)
