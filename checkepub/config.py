"""Centralized configuration for checkepub.

Environment variables and defaults live here. ``load_config()`` reads the
environment at call time and returns an immutable CheckerConfig; nothing
else in the package reads configuration from the environment.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

SERVICE_ID = "checkepub"

# --- Defaults ---

DEFAULT_BASE_URL = "http://lint.hametuha.pub/validator"
# Large EPUBs can take minutes to upload and lint.
DEFAULT_TIMEOUT_SECONDS = 10 * 60.0
# Source bytes per encoded block; a multiple of 3 keeps blocks padding-free.
DEFAULT_CHUNK_SIZE = 48 * 1024
DEFAULT_MAX_BUFFERED_CHUNKS = 4
DEFAULT_LOG_LEVEL = "WARNING"


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _float_env(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


class CheckerConfig(BaseModel):
    """Settings for one Checker. Frozen, so it can be shared between threads."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1, description="Lint API endpoint")
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="End-to-end HTTP timeout")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=3, description="Source bytes read per block")
    max_buffered_chunks: int = Field(default=DEFAULT_MAX_BUFFERED_CHUNKS, ge=1, description="Encoded blocks held in the pipe")


def load_config() -> CheckerConfig:
    """Build a CheckerConfig from ``CHECKEPUB_*`` environment variables."""
    return CheckerConfig(
        base_url=os.getenv("CHECKEPUB_BASE_URL", DEFAULT_BASE_URL),
        timeout_seconds=_float_env("CHECKEPUB_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        chunk_size=_int_env("CHECKEPUB_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        max_buffered_chunks=_int_env("CHECKEPUB_MAX_BUFFERED_CHUNKS", DEFAULT_MAX_BUFFERED_CHUNKS),
    )


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
