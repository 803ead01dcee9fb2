"""Request assembly and webhook delivery."""

from botnotify.delivery.builder import build_request
from botnotify.delivery.dispatcher import Dispatcher, response_code

__all__ = [
    "Dispatcher",
    "build_request",
    "response_code",
]
