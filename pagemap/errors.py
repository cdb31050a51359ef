"""Exception types raised while deriving page build configuration."""

from __future__ import annotations

from typing import Sequence


class PagemapError(RuntimeError):
    """Base class for every pagemap failure."""


class ConfigError(PagemapError):
    """Raised when the configuration file cannot be parsed."""


class DiscoveryError(PagemapError):
    """Raised when a scanned path does not fit the page id pattern.

    This means the file scan and the id extraction rule have drifted apart,
    so configuration assembly must stop rather than skip the file.
    """

    def __init__(self, message: str, *, path: str | None = None, pattern: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.pattern = pattern


class DuplicatePageIdError(PagemapError):
    """Raised when two files resolve to the same page id under the ``error`` policy."""

    def __init__(self, page_id: str, paths: Sequence[str]) -> None:
        joined = ", ".join(paths)
        super().__init__(f"Duplicate page id '{page_id}' from: {joined}")
        self.page_id = page_id
        self.paths = tuple(paths)


class OrphanBindingError(PagemapError):
    """Raised when entries and templates disagree under the ``error`` policy."""

    def __init__(self, messages: Sequence[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = tuple(messages)


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "DuplicatePageIdError",
    "OrphanBindingError",
    "PagemapError",
]
