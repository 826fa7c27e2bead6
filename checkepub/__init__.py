from .checker import Checker, check
from .config import CheckerConfig, load_config
from .encoder import Base64EncodeStream
from .errors import (
    CheckEpubError,
    DecodeError,
    FileAccessError,
    TransportError,
    UnexpectedStatusError,
)
from .models import Result, ValidationMessage, ValidationStatus
from .response import parse_response

__all__ = [
    "Checker",
    "check",
    "CheckerConfig",
    "load_config",
    "Base64EncodeStream",
    "CheckEpubError",
    "DecodeError",
    "FileAccessError",
    "TransportError",
    "UnexpectedStatusError",
    "Result",
    "ValidationMessage",
    "ValidationStatus",
    "parse_response",
]
