"""Error taxonomy for checkepub.

Every failure of a check call raises one of these. The underlying exception is
kept as ``__cause__`` and its message text is preserved verbatim.
"""

from __future__ import annotations


class CheckEpubError(Exception):
    """Base class for all checkepub failures."""


class FileAccessError(CheckEpubError):
    """The EPUB file could not be opened or read."""


class TransportError(CheckEpubError):
    """The HTTP request could not be built or sent (connect, timeout, bad URL)."""


class UnexpectedStatusError(CheckEpubError):
    """The lint API answered with anything other than ``200 OK``."""

    def __init__(self, status_code: int, reason_phrase: str = "") -> None:
        self.status_code = status_code
        self.status = f"{status_code} {reason_phrase}".strip()
        super().__init__(f"unexpected HTTP response status {self.status!r}")


class DecodeError(CheckEpubError):
    """The response body is not JSON or does not match the expected shape."""
