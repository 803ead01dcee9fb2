"""Template resolution: literal JSON or repository files with placeholders."""

from botnotify.template.github import ContentFetcher, GitHubContentFetcher
from botnotify.template.resolver import FILE_URI_PREFIX, resolve_template, substitute

__all__ = [
    "FILE_URI_PREFIX",
    "ContentFetcher",
    "GitHubContentFetcher",
    "resolve_template",
    "substitute",
]
