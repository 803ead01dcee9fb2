"""Shared data models for botnotify."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

# --- Enums ---


class Provider(str, Enum):
    DINGTALK = "dingtalk"
    LARK = "lark"


class SignaturePlacement(str, Enum):
    QUERY = "query"
    BODY = "body"


class TimestampUnit(str, Enum):
    MILLISECONDS = "ms"
    SECONDS = "s"


class KeyRole(str, Enum):
    # HMAC keyed by the secret over "<timestamp>\n<secret>"
    SECRET = "secret"
    # HMAC keyed by "<timestamp>\n<secret>" over an empty message
    STRING_TO_SIGN = "string_to_sign"


# --- Provider strategies ---


@dataclass(frozen=True)
class ProviderStrategy:
    """How a provider expects the signature to be computed and carried."""

    placement: SignaturePlacement
    timestamp_unit: TimestampUnit
    key_role: KeyRole
    percent_encode: bool


PROVIDER_STRATEGIES: dict[Provider, ProviderStrategy] = {
    Provider.DINGTALK: ProviderStrategy(
        placement=SignaturePlacement.QUERY,
        timestamp_unit=TimestampUnit.MILLISECONDS,
        key_role=KeyRole.SECRET,
        percent_encode=True,
    ),
    Provider.LARK: ProviderStrategy(
        placement=SignaturePlacement.BODY,
        timestamp_unit=TimestampUnit.SECONDS,
        key_role=KeyRole.STRING_TO_SIGN,
        percent_encode=False,
    ),
}


# --- Configuration Models ---


class InvocationConfig(BaseModel):
    """Raw invocation inputs, before validation."""

    model_config = ConfigDict(frozen=True)

    app: str
    webhook: str
    secret: str | None = None
    template: str
    params: str | None = None
    github_token: str | None = None
    branch: str | None = None
    repository: str | None = None  # "owner/repo"
    api_url: str = "https://api.github.com"
    timeout: float = 30.0  # seconds, per HTTP request


class ValidatedConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: Provider
    webhook: str
    secret: str = ""
    template: str
    template_is_file: bool
    params: str | None = None
    github_token: str | None = None
    branch: str = "main"


class ResolvedOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: Provider
    webhook: str
    secret: str = ""
    payload: Any


# --- Request Models ---


@dataclass(frozen=True)
class SignaturePair:
    sign: str
    timestamp: str


@dataclass(frozen=True)
class OutgoingRequest:
    url: str
    body: Any
