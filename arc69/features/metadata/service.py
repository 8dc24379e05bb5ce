"""ARC69 metadata business logic.

Reads the latest ARC69 document from the notes of an asset's configuration
transactions and publishes new documents as asset reconfiguration notes.
Reference: https://github.com/algokittens/arc69
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, cast

from arc69.account import SigningAccount
from arc69.config import Arc69Config
from arc69.errors import (
    AssetLookupError,
    InvalidMetadataError,
    MetadataEncodingError,
    MetadataNotFoundError,
    MissingClientError,
)
from arc69.features.metadata.document import JSONValue, Metadata
from arc69.shared.logging import get_logger
from arc69.shared.protocols import AlgodProtocol, IndexerProtocol
from arc69.transaction import TransactionManager

logger = get_logger(__name__)

ASSET_CONFIG_TX_TYPE = "acfg"
PAGE_LIMIT = 1000


@dataclass
class MetadataRecord:
    tx_id: str
    confirmed_round: int
    round_time: int
    metadata: Metadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "tx_id": self.tx_id,
            "confirmed_round": self.confirmed_round,
            "round_time": self.round_time,
            "metadata": self.metadata.to_dict(),
        }


def _newest_first(transactions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(
        transactions,
        key=lambda tx: (
            tx.get("round-time", 0),
            tx.get("confirmed-round", 0),
            tx.get("intra-round-offset", 0),
        ),
        reverse=True,
    )


def _decode_note(tx: dict[str, Any]) -> bytes:
    note = tx.get("note") or ""
    if not note:
        return b""
    try:
        return base64.b64decode(note, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MetadataEncodingError(f"unable to parse metadata: {e}") from e


class Arc69Service:
    def __init__(
        self,
        algod: AlgodProtocol | None = None,
        indexer: IndexerProtocol | None = None,
        transaction_manager: TransactionManager | None = None,
        config: Arc69Config | None = None,
    ):
        self.config = config or Arc69Config()
        self.algod = algod
        self.indexer = indexer
        if transaction_manager is None and algod is not None:
            transaction_manager = TransactionManager(algod, self.config)
        self.transaction_manager = transaction_manager

    def _asset_config_transactions(self, asset_id: int) -> list[dict[str, Any]]:
        indexer = cast(IndexerProtocol, self.indexer)
        transactions: list[dict[str, Any]] = []
        next_page: str | None = None

        try:
            while True:
                response = indexer.search_asset_transactions(
                    asset_id,
                    txn_type=ASSET_CONFIG_TX_TYPE,
                    next_page=next_page,
                    limit=PAGE_LIMIT,
                )
                page = response.get("transactions", [])
                transactions.extend(page)
                next_page = response.get("next-token")
                if not page or not next_page:
                    break
        except Exception as e:
            raise AssetLookupError(
                f"unable to look up asset transactions: {e}"
            ) from e

        logger.debug(
            "Found %d asset config transactions for asset %d",
            len(transactions),
            asset_id,
        )
        return transactions

    def fetch(self, asset_id: int) -> Metadata:
        """Return the most recent ARC69 metadata published for ``asset_id``."""
        if self.indexer is None:
            raise MissingClientError()

        transactions = self._asset_config_transactions(asset_id)
        if not transactions:
            raise MetadataNotFoundError(asset_id)

        for tx in _newest_first(transactions):
            note = _decode_note(tx)
            if not note:
                continue
            metadata = Metadata.from_note(note)
            logger.info(
                "Loaded ARC69 metadata for asset %d from %s", asset_id, tx.get("id")
            )
            return metadata

        raise MetadataNotFoundError(asset_id)

    def fetch_history(self, asset_id: int) -> list[MetadataRecord]:
        """Return every parsable ARC69 note of ``asset_id``, newest first."""
        if self.indexer is None:
            raise MissingClientError()

        records: list[MetadataRecord] = []
        for tx in _newest_first(self._asset_config_transactions(asset_id)):
            try:
                note = _decode_note(tx)
                if not note:
                    continue
                metadata = Metadata.from_note(note)
            except MetadataEncodingError as e:
                logger.warning("Skipping unparsable note in %s: %s", tx.get("id"), e)
                continue

            records.append(
                MetadataRecord(
                    tx_id=tx.get("id", ""),
                    confirmed_round=tx.get("confirmed-round", 0),
                    round_time=tx.get("round-time", 0),
                    metadata=metadata,
                )
            )
        return records

    def property(self, asset_id: int, path: str) -> JSONValue:
        return self.fetch(asset_id).property(path)

    def get_asset_params(self, asset_id: int) -> dict[str, Any]:
        indexer = cast(IndexerProtocol, self.indexer)
        try:
            response = indexer.asset_info(asset_id)
        except Exception as e:
            raise AssetLookupError(f"unable to fetch asset: {e}") from e
        return response.get("asset", {}).get("params", {})

    def update(
        self, account: SigningAccount, asset_id: int, metadata: Metadata
    ) -> str:
        """Publish ``metadata`` for ``asset_id`` and return the transaction id.

        The asset's current manager, reserve, freeze and clawback addresses are
        carried over unchanged. Blocks until the transaction is confirmed.
        """
        if (
            self.algod is None
            or self.indexer is None
            or self.transaction_manager is None
        ):
            raise MissingClientError()

        if not metadata.is_valid():
            raise InvalidMetadataError()

        note = metadata.to_note()
        tm = self.transaction_manager
        params = tm.get_suggested_params()
        asset_params = self.get_asset_params(asset_id)

        log = logger.with_context(asset_id=asset_id, sender=account.address)
        log.info("Updating ARC69 metadata for asset %d", asset_id)

        tx_id = tm.create_sign_and_submit(account, params, asset_id, asset_params, note)
        log.info("ARC69 metadata for asset %d updated in %s", asset_id, tx_id)
        return tx_id
