"""Capabilities the toolkit needs from algod and the indexer.

Both the REST clients in :mod:`arc69.shared.clients` and the
``algosdk.v2client`` clients satisfy these protocols.
"""

from __future__ import annotations

from typing import Any, Protocol

from algosdk import transaction


class AlgodProtocol(Protocol):
    def status(self) -> dict[str, Any]: ...

    def status_after_block(self, block_num: int) -> dict[str, Any]: ...

    def pending_transaction_info(self, transaction_id: str) -> dict[str, Any]: ...

    def suggested_params(self) -> transaction.SuggestedParams: ...

    def send_raw_transaction(self, txn: str) -> str: ...


class IndexerProtocol(Protocol):
    def search_asset_transactions(
        self,
        asset_id: int,
        *,
        txn_type: str | None = None,
        next_page: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]: ...

    def asset_info(self, asset_id: int) -> dict[str, Any]: ...
