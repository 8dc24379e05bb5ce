"""ARC69 - read, query and publish ARC69 metadata for Algorand Standard Assets.

This package is organized into feature-based modules:
- features.metadata: ARC69 document, property lookup, fetch and update
- transaction: Asset reconfiguration transactions and confirmation polling
- shared: Shared utilities (algod/indexer clients, network, logging, validation)
"""

from arc69.account import SigningAccount
from arc69.config import Arc69Config
from arc69.errors import (
    Arc69Error,
    AssetLookupError,
    ConfirmationError,
    ConfirmationTimeoutError,
    InvalidMetadataError,
    MetadataEncodingError,
    MetadataNotFoundError,
    MissingClientError,
    PoolRejectedError,
    PropertyError,
    TransactionError,
)
from arc69.features.metadata import (
    STANDARD,
    Arc69Service,
    Attribute,
    Metadata,
    MetadataRecord,
    get_property,
)
from arc69.shared import (
    AlgodClient,
    IndexerClient,
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from arc69.transaction import TransactionManager, wait_for_confirmation

__version__ = "0.1.0"
__all__ = [
    "STANDARD",
    "Arc69Service",
    "Arc69Config",
    "Attribute",
    "Metadata",
    "MetadataRecord",
    "SigningAccount",
    "TransactionManager",
    "get_property",
    "wait_for_confirmation",
    "AlgodClient",
    "IndexerClient",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "Arc69Error",
    "AssetLookupError",
    "ConfirmationError",
    "ConfirmationTimeoutError",
    "InvalidMetadataError",
    "MetadataEncodingError",
    "MetadataNotFoundError",
    "MissingClientError",
    "PoolRejectedError",
    "PropertyError",
    "TransactionError",
]
