"""REST clients for algod and the Algorand indexer.

Method names and return shapes follow ``algosdk.v2client`` so the service can
be handed either these clients or the SDK ones.

Queries and submissions are sent once. A signed transaction resent after a
read timeout may already be in the ledger, and the confirmation loop is the
only place that waits on the node. ``test_connection`` is the one call that
goes through the retry policy.
"""

from __future__ import annotations

import base64
from typing import Any

from algosdk import transaction

from arc69.shared.logging import get_logger
from arc69.shared.network import NetworkClient, RetryConfig, TimeoutConfig

logger = get_logger(__name__)

ALGOD_TOKEN_HEADER = "X-Algo-API-Token"
INDEXER_TOKEN_HEADER = "X-Indexer-API-Token"
VALIDITY_WINDOW = 1000


def _token_headers(header: str, token: str) -> dict[str, str]:
    return {header: token} if token else {}


class AlgodClient:
    def __init__(
        self,
        algod_url: str,
        algod_token: str = "",
        timeout_config: TimeoutConfig | None = None,
        retry_config: RetryConfig | None = None,
        network_client: NetworkClient | None = None,
    ):
        self.network_client = network_client or NetworkClient(
            base_url=algod_url,
            headers=_token_headers(ALGOD_TOKEN_HEADER, algod_token),
            timeout_config=timeout_config,
            retry_config=retry_config,
        )

    @property
    def base_url(self) -> str:
        return self.network_client.base_url

    def status(self) -> dict[str, Any]:
        return self.network_client.get(
            "/v2/status", context="Fetch node status", retry=False
        )

    def status_after_block(self, block_num: int) -> dict[str, Any]:
        # Blocks until the node has seen the round after block_num.
        connect_timeout = self.network_client.timeout_config.connect_timeout
        return self.network_client.get(
            f"/v2/status/wait-for-block-after/{block_num}",
            context="Wait for next round",
            retry=False,
            timeout=(connect_timeout, None),
        )

    def pending_transaction_info(self, transaction_id: str) -> dict[str, Any]:
        return self.network_client.get(
            f"/v2/transactions/pending/{transaction_id}",
            context="Fetch pending transaction",
            retry=False,
            params={"format": "json"},
        )

    def suggested_params(self) -> transaction.SuggestedParams:
        params = self.network_client.get(
            "/v2/transactions/params", context="Fetch suggested params", retry=False
        )
        last_round = params["last-round"]
        return transaction.SuggestedParams(
            fee=params["fee"],
            first=last_round,
            last=last_round + VALIDITY_WINDOW,
            gh=params["genesis-hash"],
            gen=params.get("genesis-id"),
            flat_fee=False,
            consensus_version=params.get("consensus-version"),
            min_fee=params.get("min-fee"),
        )

    def send_raw_transaction(self, txn: str) -> str:
        """Submit a base64 encoded signed transaction and return its id."""
        result = self.network_client.post(
            "/v2/transactions",
            context="Submit transaction",
            retry=False,
            data=base64.b64decode(txn),
            headers={"Content-Type": "application/x-binary"},
        )
        tx_id = result.get("txId", "")
        logger.info("Transaction submitted: %s", tx_id)
        return tx_id

    def test_connection(self) -> dict[str, Any]:
        status = self.network_client.get("/v2/status", context="Test connection")
        last_round = status.get("last-round", 0)
        catchup = status.get("catchup-time", 0)
        is_healthy = catchup == 0

        logger.info(
            "Node connection test: %s - Healthy: %s, Round: %s",
            self.base_url,
            is_healthy,
            last_round,
        )

        return {
            "healthy": is_healthy,
            "lastRound": last_round,
            "url": self.base_url,
        }


class IndexerClient:
    def __init__(
        self,
        indexer_url: str,
        indexer_token: str = "",
        timeout_config: TimeoutConfig | None = None,
        retry_config: RetryConfig | None = None,
        network_client: NetworkClient | None = None,
    ):
        self.network_client = network_client or NetworkClient(
            base_url=indexer_url,
            headers=_token_headers(INDEXER_TOKEN_HEADER, indexer_token),
            timeout_config=timeout_config,
            retry_config=retry_config,
        )

    @property
    def base_url(self) -> str:
        return self.network_client.base_url

    def search_asset_transactions(
        self,
        asset_id: int,
        *,
        txn_type: str | None = None,
        next_page: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if txn_type:
            params["tx-type"] = txn_type
        if next_page:
            params["next"] = next_page
        if limit:
            params["limit"] = limit
        return self.network_client.get(
            f"/v2/assets/{asset_id}/transactions",
            context="Search asset transactions",
            retry=False,
            params=params,
        )

    def asset_info(self, asset_id: int) -> dict[str, Any]:
        return self.network_client.get(
            f"/v2/assets/{asset_id}", context="Fetch asset", retry=False
        )
