"""Message template resolution: literal JSON or remote file with placeholders."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any

from botnotify.errors import ConfigError, FetchError, NotifyError, ParseError
from botnotify.template.github import ContentFetcher

logger = logging.getLogger(__name__)

FILE_URI_PREFIX = "file://"

_PLACEHOLDER = re.compile(r"\$\{(.*?)\}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name}")


def parse_json(text: str) -> Any:
    """Parse strict JSON; ``NaN`` and ``Infinity`` literals are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def stringify_param(value: Any) -> str:
    """Render a parameter value the way the templates expect it in text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    # String() switches to exponent notation from 1e21 up
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def substitute(value: Any, params: dict[str, Any]) -> Any:
    """Return a copy of ``value`` with ``${name}`` placeholders filled in.

    Placeholders whose name is missing from ``params`` are kept verbatim.
    """
    if isinstance(value, str):
        def _replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in params:
                return stringify_param(params[key])
            return match.group(0)

        return _PLACEHOLDER.sub(_replace, value)
    if isinstance(value, list):
        return [substitute(item, params) for item in value]
    if isinstance(value, dict):
        return {key: substitute(item, params) for key, item in value.items()}
    return value


def parse_params(params: str) -> dict[str, Any]:
    try:
        parsed = parse_json(params)
    except ValueError as e:
        raise ParseError(
            f"Parameter params must be a valid JSON object. JSON parse error: {e}",
            document="params",
            diagnostic=str(e),
        ) from e
    if not isinstance(parsed, dict):
        diagnostic = f"expected an object, got {type(parsed).__name__}"
        raise ParseError(
            f"Parameter params must be a valid JSON object. JSON parse error: {diagnostic}",
            document="params",
            diagnostic=diagnostic,
        )
    return parsed


async def fetch_template_text(fetcher: ContentFetcher, file_uri: str, branch: str) -> str:
    """Fetch a ``file://`` template through ``fetcher`` and decode it."""
    path = file_uri[len(FILE_URI_PREFIX):]
    try:
        data = await fetcher.fetch(path, branch)
    except NotifyError:
        raise
    except Exception as e:
        raise FetchError(
            "Something is wrong when getting file content from repository", path=path,
        ) from e

    try:
        return base64.b64decode(data["content"]).decode("utf-8")
    except (KeyError, TypeError, binascii.Error, UnicodeDecodeError) as e:
        raise FetchError(f"Template file {path} has undecodable content: {e}", path=path) from e


async def resolve_template(
    template: str,
    params: str | None = None,
    fetcher: ContentFetcher | None = None,
    branch: str = "main",
) -> Any:
    """Turn a template specifier into the payload to send.

    A literal template is parsed as-is with no substitution. A ``file://``
    template is fetched, parsed, then filled from ``params``.
    """
    if not template.startswith(FILE_URI_PREFIX):
        try:
            return parse_json(template)
        except ValueError as e:
            raise ParseError(
                f"Parameter template must be a JSON object. JSON parse error: {e}",
                document="template",
                diagnostic=str(e),
            ) from e

    if not params or fetcher is None:
        raise ConfigError(
            "Parameter params and parameter githubToken is required "
            "when template is a file URI",
        )

    param_map = parse_params(params)
    text = await fetch_template_text(fetcher, template, branch)
    logger.info("Fetched template %s at %s", template, branch)

    try:
        template_obj = parse_json(text)
    except ValueError as e:
        raise ParseError(
            f"Template file must contain valid JSON. JSON parse error: {e}",
            document="template file",
            diagnostic=str(e),
        ) from e

    return substitute(template_obj, param_map)
