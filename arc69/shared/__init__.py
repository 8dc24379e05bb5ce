"""Shared utilities for the ARC69 toolkit."""

from arc69.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from arc69.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from arc69.shared.clients import AlgodClient, IndexerClient
from arc69.shared.protocols import AlgodProtocol, IndexerProtocol
from arc69.shared.validation import (
    AddressValidator,
    AssetIdValidator,
    RoundsValidator,
    ValidationResult,
)

__all__ = [
    "AlgodClient",
    "IndexerClient",
    "AlgodProtocol",
    "IndexerProtocol",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "AddressValidator",
    "AssetIdValidator",
    "RoundsValidator",
    "ValidationResult",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
