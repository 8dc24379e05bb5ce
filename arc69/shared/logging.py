"""Logging setup for the ARC69 toolkit.

Everything logs under the ``arc69`` logger. Records can carry a ``context``
dict (asset id, tx id, sender...) through :class:`ContextAdapter`, and both
formatters scrub private keys, mnemonics and passwords before anything is
written. :func:`format_error_for_user` turns exceptions into short messages
for the terminal UI.

Environment:
    ARC69_LOG_LEVEL     DEBUG, INFO (default), WARNING, ERROR or CRITICAL
    ARC69_LOG_FORMAT    human (default) or json
    ARC69_LOG_TO_FILE   write ``arc69.log`` (default on)
    ARC69_LOG_DIR       directory of the log file (default ``~/.arc69``)
    ARC69_LOG_STDOUT    also log to stdout
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

ROOT_LOGGER = "arc69"
DEFAULT_LOG_DIR = Path.home() / ".arc69"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LoggingConfig:
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "human"
    log_to_file: bool = True
    log_to_stdout: bool = False
    log_dir: Path | None = None
    log_filename: str = "arc69.log"
    sanitize_sensitive: bool = True

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        level_name = os.getenv("ARC69_LOG_LEVEL", "INFO").strip().upper()
        log_level = LogLevel.__members__.get(level_name, LogLevel.INFO)
        log_dir = os.getenv("ARC69_LOG_DIR")
        log_format = os.getenv("ARC69_LOG_FORMAT", "human").strip().lower()

        return cls(
            log_level=log_level,
            log_format="json" if log_format == "json" else "human",
            log_to_file=_env_flag("ARC69_LOG_TO_FILE", default=True),
            log_to_stdout=_env_flag("ARC69_LOG_STDOUT"),
            log_dir=Path(log_dir).expanduser() if log_dir else None,
        )


# Algorand secrets: 64-byte keys are 88 base64 chars, mnemonics are 25 words.
_KEY = r"[A-Za-z0-9+/]{86}=="
_MNEMONIC = r"(?:[a-z]{3,8}\s+){24}[a-z]{3,8}"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf"(private[_-]?key['\"]?\s*[:=]\s*['\"]?){_KEY}", re.I), r"\1[REDACTED]"),
    (re.compile(rf"(mnemonic['\"]?\s*[:=]\s*['\"]?){_MNEMONIC}", re.I), r"\1[REDACTED]"),
    (re.compile(r"(password['\"]?\s*[:=]\s*['\"]?)[^\s'\"]+", re.I), r"\1[REDACTED]"),
    (re.compile(rf"(?<![A-Za-z0-9+/]){_KEY}"), "[KEY_REDACTED]"),
    (re.compile(rf"\b{_MNEMONIC}\b"), "[MNEMONIC_REDACTED]"),
]

ADDRESS_PATTERN = re.compile(r"\b[A-Z2-7]{58}\b")

SENSITIVE_KEYS = ("private_key", "privatekey", "mnemonic", "password", "secret", "token")


def sanitize_message(message: str, preserve_addresses: bool = True) -> str:
    if not message:
        return message
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    if not preserve_addresses:
        message = ADDRESS_PATTERN.sub("[ADDRESS_REDACTED]", message)
    return message


def _sanitize_value(value: Any, preserve_addresses: bool) -> Any:
    if isinstance(value, str):
        return sanitize_message(value, preserve_addresses)
    if isinstance(value, dict):
        return sanitize_dict(value, preserve_addresses)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, preserve_addresses) for item in value]
    return value


def sanitize_dict(
    data: dict[str, Any], preserve_addresses: bool = True
) -> dict[str, Any]:
    return {
        key: "[REDACTED]"
        if any(name in key.lower() for name in SENSITIVE_KEYS)
        else _sanitize_value(value, preserve_addresses)
        for key, value in data.items()
    }


# (pattern, message, suggestion); first match wins.
USER_ERRORS: list[tuple[str, str, str | None]] = [
    (
        r"no arc69 metadata found",
        "This asset has no ARC69 metadata.",
        "Check the asset ID or publish metadata first.",
    ),
    (
        r"unable to get property|no path provided",
        "The requested property does not exist in the metadata.",
        "Use a dot-separated path such as 'traits.color'.",
    ),
    (
        r"invalid metadata|unable to parse metadata",
        "The metadata is not ARC69 compliant.",
        "Set the 'standard' field to 'arc69'.",
    ),
    (
        r"pool error|rejected",
        "The network rejected the transaction.",
        "Check that the account is the asset manager and can pay the fee.",
    ),
    (
        r"round range|waiting for confirmation",
        "The transaction was not confirmed in time.",
        "Look the transaction up later; it may still confirm.",
    ),
    (
        r"timeout|timed out",
        "Connection timed out. The node may be slow or unavailable.",
        "Try again later or check your network connection.",
    ),
    (
        r"cannot connect|connection refused|connection error",
        "Unable to connect to the node.",
        "Check the algod and indexer URLs.",
    ),
    (
        r"overspend|below min|insufficient",
        "Insufficient balance for this transaction.",
        "Fund the account with enough ALGO for the fee.",
    ),
    (
        r"address.*(invalid|checksum)|checksum",
        "The address provided is not valid.",
        "Please check the Algorand address.",
    ),
    (
        r"mnemonic|private key",
        "The provided key or mnemonic is not valid.",
        "Please verify the 25-word mnemonic and try again.",
    ),
    (
        r"unauthorized|forbidden|\b40[13]\b",
        "Access denied by the node.",
        "Check the algod and indexer API tokens.",
    ),
    (
        r"not found|\b404\b|does not exist",
        "The requested asset or transaction was not found.",
        "The asset may have been destroyed or never existed.",
    ),
    (
        r"rate limit|too many requests|\b429\b",
        "Too many requests. Please slow down.",
        "Wait a moment and try again.",
    ),
    (
        r"network error|http error",
        "A network error occurred.",
        "Check your internet connection.",
    ),
]


def get_user_friendly_error(error: Exception | str) -> tuple[str, str | None]:
    text = str(error).lower()
    for pattern, message, suggestion in USER_ERRORS:
        if re.search(pattern, text):
            return message, suggestion
    return "An unexpected error occurred.", None


def format_error_for_user(error: Exception | str) -> str:
    message, suggestion = get_user_friendly_error(error)
    return f"{message} {suggestion}" if suggestion else message


class _SanitizingFormatter(logging.Formatter):
    def __init__(self, sanitize: bool = True, preserve_addresses: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.sanitize = sanitize
        self.preserve_addresses = preserve_addresses

    def clean(self, text: str) -> str:
        if not self.sanitize:
            return text
        return sanitize_message(text, self.preserve_addresses)

    def context_of(self, record: logging.LogRecord) -> dict[str, Any]:
        context = getattr(record, "context", None)
        if not isinstance(context, dict) or not context:
            return {}
        if self.sanitize:
            return sanitize_dict(context, self.preserve_addresses)
        return context


class StructuredFormatter(_SanitizingFormatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self.clean(record.getMessage()),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        context = self.context_of(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.clean(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)


class HumanReadableFormatter(_SanitizingFormatter):
    """``time - logger - LEVEL - message [key=value ...]``"""

    def __init__(self, sanitize: bool = True, preserve_addresses: bool = True):
        super().__init__(
            sanitize,
            preserve_addresses,
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.message = self.clean(record.message)
        return super().formatMessage(record)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = self.context_of(record)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            text = f"{text} [{pairs}]"
        return text


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a ``context`` dict to every record."""

    def __init__(self, logger: logging.Logger, context: dict[str, Any] | None = None):
        super().__init__(logger, dict(context or {}))

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        context = {**(self.extra or {}), **extra.pop("context", {})}
        if context:
            extra["context"] = context
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **kwargs: Any) -> "ContextAdapter":
        return ContextAdapter(self.logger, {**(self.extra or {}), **kwargs})


_configured = False


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Attach handlers to the ``arc69`` logger. Only the first call has effect."""
    global _configured
    if _configured:
        return

    config = config or LoggingConfig.from_environment()
    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(config.log_level.value)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    if config.log_to_file:
        log_dir = config.log_dir or DEFAULT_LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(log_dir / config.log_filename, encoding="utf-8")
        )
    if config.log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        if config.log_format == "json":
            handler.setFormatter(StructuredFormatter(sanitize=config.sanitize_sensitive))
        else:
            handler.setFormatter(
                HumanReadableFormatter(sanitize=config.sanitize_sensitive)
            )
        package_logger.addHandler(handler)

    _configured = True


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextAdapter:
    setup_logging()
    return ContextAdapter(logging.getLogger(name), context)


__all__ = [
    "LogLevel",
    "LoggingConfig",
    "ContextAdapter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "sanitize_message",
    "sanitize_dict",
    "get_user_friendly_error",
    "format_error_for_user",
    "setup_logging",
    "get_logger",
]
