from __future__ import annotations

from typing import Any

from algosdk import encoding, transaction

from arc69.account import SigningAccount
from arc69.config import Arc69Config
from arc69.errors import (
    ConfirmationError,
    ConfirmationTimeoutError,
    PoolRejectedError,
    TransactionError,
)
from arc69.shared.logging import get_logger
from arc69.shared.protocols import AlgodProtocol
from arc69.shared.validation import RoundsValidator

logger = get_logger(__name__)


def wait_for_confirmation(
    tx_id: str,
    client: AlgodProtocol | None,
    timeout_rounds: int,
) -> dict[str, Any]:
    """Poll ``client`` once per round until ``tx_id`` is confirmed.

    Returns the pending transaction info of the confirmed transaction. Raises
    :class:`PoolRejectedError` when the node drops it from the pool,
    :class:`ConfirmationTimeoutError` after ``timeout_rounds`` rounds and
    :class:`ConfirmationError` when a query fails.
    """
    rounds_check = RoundsValidator.validate(timeout_rounds)
    if client is None or not tx_id or not rounds_check.is_valid:
        raise ValueError("bad arguments for wait_for_confirmation")

    try:
        status = client.status()
    except Exception as e:
        raise ConfirmationError(f"error getting algod status: {e}", tx_id) from e

    start_round = status["last-round"] + 1
    current_round = start_round
    end_round = start_round + timeout_rounds
    log = logger.with_context(tx_id=tx_id)

    while current_round < end_round:
        try:
            pending = client.pending_transaction_info(tx_id)
        except Exception as e:
            raise ConfirmationError(
                f"error getting pending transaction: {e}", tx_id
            ) from e

        confirmed_round = pending.get("confirmed-round", 0) or 0
        if confirmed_round > 0:
            log.info("Transaction %s confirmed in round %d", tx_id, confirmed_round)
            return pending

        pool_error = pending.get("pool-error", "")
        if pool_error:
            log.warning("Transaction %s rejected: %s", tx_id, pool_error)
            raise PoolRejectedError(tx_id, pool_error)

        log.debug("Waiting for confirmation... round %d", current_round)
        try:
            client.status_after_block(current_round)
        except Exception as e:
            raise ConfirmationError(
                f"error waiting for round {current_round}: {e}", tx_id
            ) from e
        current_round += 1

    raise ConfirmationTimeoutError(tx_id, start_round, end_round)


class TransactionManager:
    """Builds, signs and submits ARC69 asset configuration transactions."""

    def __init__(self, algod: AlgodProtocol, config: Arc69Config | None = None):
        self.algod = algod
        self.config = config or Arc69Config()

    def get_suggested_params(self) -> transaction.SuggestedParams:
        try:
            return self.algod.suggested_params()
        except Exception as e:
            raise TransactionError(f"error getting suggested tx params: {e}") from e

    def create_asset_config_transaction(
        self,
        sender: str,
        params: transaction.SuggestedParams,
        asset_id: int,
        asset_params: dict[str, Any],
        note: bytes,
    ) -> transaction.AssetConfigTxn:
        # Roles left unset would be cleared for good, so carry the current ones over.
        return transaction.AssetConfigTxn(
            sender=sender,
            sp=params,
            index=asset_id,
            manager=asset_params.get("manager") or None,
            reserve=asset_params.get("reserve") or None,
            freeze=asset_params.get("freeze") or None,
            clawback=asset_params.get("clawback") or None,
            note=note,
            strict_empty_address_check=self.config.strict_empty_address_check,
        )

    def sign_transaction(
        self, txn: transaction.Transaction, signer: SigningAccount
    ) -> tuple[str, transaction.SignedTransaction]:
        signed = txn.sign(signer.private_key)
        return txn.get_txid(), signed

    def submit(self, signed: transaction.SignedTransaction) -> str:
        return self.algod.send_raw_transaction(encoding.msgpack_encode(signed))

    def wait_for_confirmation(
        self, tx_id: str, timeout_rounds: int | None = None
    ) -> dict[str, Any]:
        if timeout_rounds is None:
            timeout_rounds = self.config.confirmation_rounds
        return wait_for_confirmation(tx_id, self.algod, timeout_rounds)

    def create_sign_and_submit(
        self,
        signer: SigningAccount,
        params: transaction.SuggestedParams,
        asset_id: int,
        asset_params: dict[str, Any],
        note: bytes,
    ) -> str:
        """Reconfigure ``asset_id`` with ``note`` and wait until it is confirmed."""
        try:
            txn = self.create_asset_config_transaction(
                signer.address, params, asset_id, asset_params, note
            )
        except Exception as e:
            raise TransactionError(
                f"error creating asset config transaction: {e}"
            ) from e

        try:
            tx_id, signed = self.sign_transaction(txn, signer)
        except Exception as e:
            raise TransactionError(f"failed to sign transaction: {e}") from e

        try:
            self.submit(signed)
        except Exception as e:
            raise TransactionError(f"failed to send transaction: {e}", tx_id) from e

        logger.info("Asset config transaction sent for asset %d: %s", asset_id, tx_id)

        try:
            self.wait_for_confirmation(tx_id)
        except ConfirmationError as e:
            raise TransactionError(
                f"error waiting for confirmation on txID: {tx_id}", tx_id
            ) from e

        return tx_id
