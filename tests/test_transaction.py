"""Tests for confirmation polling and asset config transactions."""

from unittest.mock import MagicMock

import pytest
from algosdk import encoding, transaction

from arc69.config import Arc69Config
from arc69.errors import (
    ConfirmationError,
    ConfirmationTimeoutError,
    PoolRejectedError,
    TransactionError,
)
from arc69.transaction import TransactionManager, wait_for_confirmation


def make_client(pending_responses, last_round=1000):
    client = MagicMock()
    client.status.return_value = {"last-round": last_round}
    client.pending_transaction_info.side_effect = pending_responses
    client.status_after_block.return_value = {}
    return client


NOT_YET = {"confirmed-round": 0, "pool-error": ""}


@pytest.mark.unit
class TestWaitForConfirmation:
    def test_confirmed_on_second_round(self):
        confirmed = {"confirmed-round": 1002, "pool-error": ""}
        client = make_client([NOT_YET, confirmed])

        result = wait_for_confirmation("TXID", client, 4)

        assert result is confirmed
        assert client.pending_transaction_info.call_count == 2
        client.status_after_block.assert_called_once_with(1001)

    def test_confirmed_immediately(self):
        client = make_client([{"confirmed-round": 999}])

        result = wait_for_confirmation("TXID", client, 1)

        assert result["confirmed-round"] == 999
        client.status_after_block.assert_not_called()

    def test_times_out_after_requested_rounds(self):
        client = make_client([NOT_YET] * 10)

        with pytest.raises(ConfirmationTimeoutError) as exc_info:
            wait_for_confirmation("TXID", client, 3)

        assert str(exc_info.value) == "tx not found in round range"
        assert exc_info.value.tx_id == "TXID"
        assert exc_info.value.start_round == 1001
        assert exc_info.value.end_round == 1004
        assert client.pending_transaction_info.call_count == 3
        assert [c.args[0] for c in client.status_after_block.call_args_list] == [
            1001,
            1002,
            1003,
        ]

    def test_pool_error_stops_polling(self):
        client = make_client([{"confirmed-round": 0, "pool-error": "overspend"}])

        with pytest.raises(PoolRejectedError) as exc_info:
            wait_for_confirmation("TXID", client, 4)

        assert exc_info.value.pool_error == "overspend"
        assert str(exc_info.value) == (
            "there was a pool error, then the transaction has been rejected: overspend"
        )
        client.status_after_block.assert_not_called()

    def test_pending_query_failure(self):
        client = make_client(RuntimeError("node unreachable"))

        with pytest.raises(ConfirmationError, match="error getting pending transaction"):
            wait_for_confirmation("TXID", client, 4)

    def test_status_failure(self):
        client = make_client([])
        client.status.side_effect = RuntimeError("node unreachable")

        with pytest.raises(ConfirmationError, match="error getting algod status"):
            wait_for_confirmation("TXID", client, 4)

        client.pending_transaction_info.assert_not_called()

    def test_block_wait_failure(self):
        client = make_client([NOT_YET])
        client.status_after_block.side_effect = RuntimeError("stream closed")

        with pytest.raises(ConfirmationError, match="error waiting for round 1001"):
            wait_for_confirmation("TXID", client, 4)

    @pytest.mark.parametrize(
        "tx_id,client,rounds",
        [
            ("", MagicMock(), 4),
            ("TXID", None, 4),
            ("TXID", MagicMock(), 0),
            ("TXID", MagicMock(), -1),
            ("TXID", MagicMock(), True),
            ("TXID", MagicMock(), "4"),
        ],
    )
    def test_bad_arguments(self, tx_id, client, rounds):
        with pytest.raises(ValueError, match="bad arguments for wait_for_confirmation"):
            wait_for_confirmation(tx_id, client, rounds)

        if client is not None:
            client.status.assert_not_called()


@pytest.mark.unit
class TestTransactionManager:
    def test_get_suggested_params_failure(self, mock_algod):
        mock_algod.suggested_params.side_effect = RuntimeError("boom")
        manager = TransactionManager(mock_algod)

        with pytest.raises(TransactionError, match="error getting suggested tx params: boom"):
            manager.get_suggested_params()

    def test_create_asset_config_transaction(
        self, mock_algod, signing_account, other_address, suggested_params
    ):
        manager = TransactionManager(mock_algod)
        asset_params = {
            "manager": signing_account.address,
            "reserve": other_address,
            "freeze": other_address,
            "clawback": signing_account.address,
        }

        txn = manager.create_asset_config_transaction(
            signing_account.address, suggested_params, 42, asset_params, b'{"standard":"arc69"}'
        )

        assert isinstance(txn, transaction.AssetConfigTxn)
        assert txn.index == 42
        assert txn.reserve == other_address
        assert txn.freeze == other_address
        assert txn.note == b'{"standard":"arc69"}'

    def test_sign_and_submit(self, mock_algod, signing_account, suggested_params):
        manager = TransactionManager(mock_algod)
        roles = {"manager": signing_account.address, "reserve": signing_account.address,
                 "freeze": signing_account.address, "clawback": signing_account.address}
        txn = manager.create_asset_config_transaction(
            signing_account.address, suggested_params, 42, roles, b"note"
        )

        tx_id, signed = manager.sign_transaction(txn, signing_account)
        manager.submit(signed)

        assert tx_id == txn.get_txid()
        raw = mock_algod.send_raw_transaction.call_args.args[0]
        assert raw == encoding.msgpack_encode(signed)

    def test_wait_uses_configured_rounds(self):
        client = make_client([NOT_YET] * 10)
        manager = TransactionManager(client, Arc69Config(confirmation_rounds=2))

        with pytest.raises(ConfirmationTimeoutError):
            manager.wait_for_confirmation("TXID")

        assert client.pending_transaction_info.call_count == 2

    def test_create_sign_and_submit_returns_tx_id(
        self, mock_algod, signing_account, suggested_params
    ):
        manager = TransactionManager(mock_algod)
        roles = {"manager": signing_account.address, "reserve": signing_account.address,
                 "freeze": signing_account.address, "clawback": signing_account.address}

        tx_id = manager.create_sign_and_submit(
            signing_account, suggested_params, 42, roles, b"note"
        )

        mock_algod.pending_transaction_info.assert_called_once_with(tx_id)

    def test_create_sign_and_submit_timeout(
        self, signing_account, suggested_params
    ):
        client = make_client([NOT_YET] * 10)
        client.send_raw_transaction.return_value = "TXID"
        manager = TransactionManager(client, Arc69Config(confirmation_rounds=1))
        roles = {"manager": signing_account.address, "reserve": signing_account.address,
                 "freeze": signing_account.address, "clawback": signing_account.address}

        with pytest.raises(TransactionError) as exc_info:
            manager.create_sign_and_submit(
                signing_account, suggested_params, 42, roles, b"note"
            )

        assert exc_info.value.tx_id is not None
        assert str(exc_info.value) == (
            f"error waiting for confirmation on txID: {exc_info.value.tx_id}"
        )
        assert isinstance(exc_info.value.__cause__, ConfirmationTimeoutError)
