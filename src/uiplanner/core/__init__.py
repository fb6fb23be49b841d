"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    PlanError,
    MalformedResponse,
    EmptyInput,
    SchemaViolation,
    UnknownKind,
    RequestRejected,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    JSONParseError,
    decode_json,
    safe_json_dumps,
    canonical_json,
    validate_json_size,
)
from .hash import Algorithm, hash_string, hash_fields
from .cache import LRUCache, Stats


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "PlanError",
    "MalformedResponse",
    "EmptyInput",
    "SchemaViolation",
    "UnknownKind",
    "RequestRejected",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "JSONParseError",
    "decode_json",
    "safe_json_dumps",
    "canonical_json",
    "validate_json_size",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    # Caching
    "LRUCache",
    "Stats",
]
