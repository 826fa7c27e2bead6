"""HamePub Lint API client.

A Checker sends one EPUB file per call to the lint API as a streamed,
base64-encoded request body and turns the JSON answer into a Result.

Each call opens its own file handle, encoder thread and HTTP client, so one
Checker can serve concurrent calls from several threads.

Usage::

    from checkepub import Checker, CheckerConfig

    result = Checker(CheckerConfig(timeout_seconds=60)).check("book.epub")
    print(result)
"""

from __future__ import annotations

import logging
import os
import time

import httpx

from checkepub.config import CheckerConfig, load_config
from checkepub.encoder import Base64EncodeStream
from checkepub.errors import FileAccessError, TransportError, UnexpectedStatusError
from checkepub.models import Result
from checkepub.response import parse_response

logger = logging.getLogger(__name__)


class Checker:
    """Lint API client bound to an immutable CheckerConfig.

    Args:
        config: Endpoint, timeout and encoder settings. Defaults to
            ``load_config()``.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
            in tests.
    """

    def __init__(
        self,
        config: CheckerConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config if config is not None else load_config()
        self._transport = transport

    @property
    def config(self) -> CheckerConfig:
        return self._config

    def check(self, epub_path: str | os.PathLike) -> Result:
        """Submit the EPUB at ``epub_path`` to the lint API and return its verdict.

        Raises:
            FileAccessError: The file cannot be opened or read. Raised before
                any network activity when the file cannot be opened.
            TransportError: The request could not be sent or timed out.
            UnexpectedStatusError: The API answered with a status other than 200.
            DecodeError: The response body is not the expected JSON.
        """
        path = os.fspath(epub_path)
        try:
            epub_file = open(path, "rb")
        except OSError as exc:
            logger.warning("epub_open_failed", extra={"path": path, "error": str(exc)})
            raise FileAccessError(str(exc)) from exc

        logger.info("check_started", extra={"path": path, "url": self._config.base_url})
        started = time.monotonic()

        with epub_file, Base64EncodeStream(
            epub_file,
            chunk_size=self._config.chunk_size,
            max_buffered_chunks=self._config.max_buffered_chunks,
        ) as body:
            response = self._post(body)

        if response.status_code != httpx.codes.OK:
            error = UnexpectedStatusError(response.status_code, response.reason_phrase)
            logger.warning("check_unexpected_status", extra={"path": path, "status": error.status})
            raise error

        result = parse_response(response.content)
        logger.info(
            "check_complete",
            extra={
                "path": path,
                "status": result.status.value,
                "error_count": len(result.errors),
                "elapsed_s": round(time.monotonic() - started, 3),
            },
        )
        return result

    def _post(self, body: Base64EncodeStream) -> httpx.Response:
        """POST the encoded body; httpx sends it chunked since its length is unknown."""
        try:
            with httpx.Client(timeout=self._config.timeout_seconds, transport=self._transport) as client:
                return client.post(self._config.base_url, content=body)
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            logger.warning("check_transport_failed", extra={"url": self._config.base_url, "error": str(exc)})
            raise TransportError(str(exc)) from exc
        except OSError as exc:
            # Source read failure re-raised through the encoder mid-upload.
            logger.warning("epub_read_failed", extra={"error": str(exc)})
            raise FileAccessError(str(exc)) from exc


def check(epub_path: str | os.PathLike) -> Result:
    """Validate one EPUB with the default configuration. Single shot, no retries."""
    return Checker().check(epub_path)
