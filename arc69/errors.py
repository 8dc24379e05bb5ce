"""Exceptions raised by the ARC69 toolkit."""

from __future__ import annotations


class Arc69Error(Exception):
    """Base class for every ARC69 toolkit failure."""


class MissingClientError(Arc69Error):
    def __init__(self, message: str = "client is missing"):
        super().__init__(message)


class MetadataNotFoundError(Arc69Error):
    def __init__(self, asset_id: int):
        self.asset_id = asset_id
        super().__init__(f"no ARC69 metadata found for asset {asset_id}")


class PropertyError(Arc69Error):
    """A property path could not be resolved against the properties bag.

    ``prefix`` is the dotted part of ``path`` that was walked when the lookup
    failed; it is None when no path was given at all.
    """

    def __init__(self, message: str, path: str = "", prefix: str | None = None):
        self.path = path
        self.prefix = prefix
        super().__init__(message)


class InvalidMetadataError(Arc69Error):
    def __init__(self, message: str = "invalid metadata"):
        super().__init__(message)


class MetadataEncodingError(Arc69Error):
    pass


class AssetLookupError(Arc69Error):
    pass


class TransactionError(Arc69Error):
    def __init__(self, message: str, tx_id: str | None = None):
        self.tx_id = tx_id
        super().__init__(message)


class ConfirmationError(Arc69Error):
    def __init__(self, message: str, tx_id: str | None = None):
        self.tx_id = tx_id
        super().__init__(message)


class PoolRejectedError(ConfirmationError):
    def __init__(self, tx_id: str, pool_error: str):
        self.pool_error = pool_error
        super().__init__(
            "there was a pool error, then the transaction has been rejected: "
            f"{pool_error}",
            tx_id=tx_id,
        )


class ConfirmationTimeoutError(ConfirmationError):
    def __init__(self, tx_id: str, start_round: int, end_round: int):
        self.start_round = start_round
        self.end_round = end_round
        super().__init__("tx not found in round range", tx_id=tx_id)


__all__ = [
    "Arc69Error",
    "MissingClientError",
    "MetadataNotFoundError",
    "PropertyError",
    "InvalidMetadataError",
    "MetadataEncodingError",
    "AssetLookupError",
    "TransactionError",
    "ConfirmationError",
    "PoolRejectedError",
    "ConfirmationTimeoutError",
]
