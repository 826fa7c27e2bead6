"""Tests for checkepub/config.py — env var loading with defaults."""

import pytest
from pydantic import ValidationError

from checkepub.config import (
    DEFAULT_BASE_URL,
    CheckerConfig,
    get_log_level,
    load_config,
)

_ENV_VARS = (
    "CHECKEPUB_BASE_URL",
    "CHECKEPUB_TIMEOUT_SECONDS",
    "CHECKEPUB_CHUNK_SIZE",
    "CHECKEPUB_MAX_BUFFERED_CHUNKS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_default_base_url():
    assert load_config().base_url == "http://lint.hametuha.pub/validator"
    assert DEFAULT_BASE_URL == "http://lint.hametuha.pub/validator"


def test_default_timeout_is_ten_minutes():
    assert load_config().timeout_seconds == 600.0


def test_default_chunk_size_is_multiple_of_three():
    assert load_config().chunk_size % 3 == 0


def test_default_max_buffered_chunks():
    assert load_config().max_buffered_chunks == 4


def test_custom_base_url(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_BASE_URL", "http://localhost:8080/validator")
    assert load_config().base_url == "http://localhost:8080/validator"


def test_custom_timeout(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_TIMEOUT_SECONDS", "30")
    assert load_config().timeout_seconds == 30.0


def test_custom_chunk_size(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_CHUNK_SIZE", "3000")
    assert load_config().chunk_size == 3000


def test_custom_max_buffered_chunks(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_MAX_BUFFERED_CHUNKS", "16")
    assert load_config().max_buffered_chunks == 16


def test_non_numeric_timeout_raises(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_TIMEOUT_SECONDS", "forever")
    with pytest.raises(ValueError):
        load_config()


def test_zero_timeout_rejected(monkeypatch):
    monkeypatch.setenv("CHECKEPUB_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        load_config()


def test_empty_base_url_rejected():
    with pytest.raises(ValidationError):
        CheckerConfig(base_url="")


def test_tiny_chunk_size_rejected():
    with pytest.raises(ValidationError):
        CheckerConfig(chunk_size=2)


def test_config_is_frozen():
    config = CheckerConfig()
    with pytest.raises(ValidationError):
        config.base_url = "http://elsewhere"


def test_default_log_level():
    assert get_log_level() == "WARNING"


def test_custom_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level() == "debug"
