"""Invocation config validation: turns raw inputs into typed options.

Rules are checked in order and the first failure wins:

1. ``app`` must name a known provider.
2. ``webhook`` must look like an http(s) URL.
3. A ``file://`` template needs both ``params`` and ``github_token``.

``secret`` defaults to an empty string and ``branch`` to ``main``.
"""

from __future__ import annotations

import logging
import re

from botnotify.errors import ConfigError
from botnotify.models import InvocationConfig, Provider, ResolvedOptions, ValidatedConfig
from botnotify.template.github import ContentFetcher, GitHubContentFetcher
from botnotify.template.resolver import FILE_URI_PREFIX, resolve_template

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://[^\s/$.?#][^\s]*", re.IGNORECASE)

DEFAULT_BRANCH = "main"


def _provider_names() -> list[str]:
    return [p.value for p in Provider]


def validate_config(config: InvocationConfig) -> ValidatedConfig:
    """Validate raw inputs without touching the network."""
    names = _provider_names()
    if config.app not in names:
        raise ConfigError(f'Parameter app must be one of "{", ".join(names)}"')

    if not URL_PATTERN.fullmatch(config.webhook):
        raise ConfigError("Parameter webhook must be a URL")

    template_is_file = config.template.startswith(FILE_URI_PREFIX)
    if template_is_file and (not config.params or not config.github_token):
        raise ConfigError(
            "Parameter params and parameter githubToken is required "
            "when template is a file URI",
        )

    return ValidatedConfig(
        provider=Provider(config.app),
        webhook=config.webhook,
        secret=config.secret or "",
        template=config.template,
        template_is_file=template_is_file,
        params=config.params or None,
        github_token=config.github_token or None,
        branch=config.branch or DEFAULT_BRANCH,
    )


async def resolve_options(
    config: InvocationConfig,
    fetcher: ContentFetcher | None = None,
) -> ResolvedOptions:
    """Validate ``config`` and resolve its template into a payload.

    When the template is a file reference and no ``fetcher`` is given, a
    :class:`GitHubContentFetcher` is built from the config's token,
    repository, API URL and timeout.
    """
    validated = validate_config(config)

    if validated.template_is_file and fetcher is None:
        fetcher = GitHubContentFetcher(
            token=validated.github_token or "",
            repository=config.repository,
            api_url=config.api_url,
            timeout=config.timeout,
        )

    payload = await resolve_template(
        validated.template,
        params=validated.params,
        fetcher=fetcher if validated.template_is_file else None,
        branch=validated.branch,
    )
    logger.debug("Resolved %s payload for provider %s", type(payload).__name__, validated.provider.value)

    return ResolvedOptions(
        provider=validated.provider,
        webhook=validated.webhook,
        secret=validated.secret,
        payload=payload,
    )
