"""Exceptions raised while preparing and delivering a notification."""

from __future__ import annotations


class NotifyError(Exception):
    """Base class for every failure that aborts a notification run."""


class ConfigError(NotifyError):
    """Raised when the invocation configuration is invalid."""


class TemplateError(NotifyError):
    """Raised when the message template cannot be resolved."""


class ParseError(TemplateError):
    """Raised when one of the JSON documents fails to parse.

    ``document`` names which input failed (``params``, ``template`` or
    ``template file``) and ``diagnostic`` carries the parser message.
    """

    def __init__(self, message: str, document: str, diagnostic: str) -> None:
        self.document = document
        self.diagnostic = diagnostic
        super().__init__(message)


class FetchError(TemplateError):
    """Raised when the remote template file cannot be retrieved."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class DeliveryError(NotifyError):
    """Raised when the webhook POST fails or the provider rejects it.

    ``response`` holds the serialized provider reply for application-level
    rejections and is ``None`` for transport failures.
    """

    def __init__(self, message: str, response: str | None = None) -> None:
        self.response = response
        super().__init__(message)
