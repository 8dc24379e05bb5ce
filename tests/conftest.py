import base64
import json
import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

os.environ.setdefault("ARC69_LOG_TO_FILE", "0")

import pytest
from algosdk import transaction

from arc69.account import SigningAccount
from arc69.features.metadata.document import Attribute, Metadata


def encode_note(document: dict | str) -> str:
    """Encode a metadata document the way the indexer returns notes."""
    text = document if isinstance(document, str) else json.dumps(document)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def signing_account():
    """Fixture providing a freshly generated Algorand account"""
    return SigningAccount.generate()


@pytest.fixture
def other_address():
    """Fixture providing an unrelated Algorand address"""
    return SigningAccount.generate().address


@pytest.fixture
def sample_metadata():
    """Fixture providing a valid ARC69 document"""
    return Metadata(
        description="Sunset over the bay",
        external_url="https://example.com/nft/1",
        media_url="ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
        properties={
            "artist": "ana",
            "traits": {"color": "orange", "rarity": {"tier": 2}},
        },
        mime_type="image/png",
        attributes=[
            Attribute(trait_type="Background", value="Sunset"),
            Attribute(trait_type="Level", value=3),
        ],
    )


@pytest.fixture
def suggested_params():
    """Fixture providing testnet-like suggested params"""
    return transaction.SuggestedParams(
        fee=0,
        first=1000,
        last=2000,
        gh="SGO1GKSzyE7IEPItTxCByw9x8FmnrCDexi9/cOUJOiI=",
        gen="testnet-v1.0",
        flat_fee=False,
        min_fee=1000,
    )


@pytest.fixture
def mock_algod(suggested_params):
    """Fixture providing an algod client that confirms on the first poll"""
    algod = MagicMock()
    algod.status.return_value = {"last-round": 100}
    algod.suggested_params.return_value = suggested_params
    algod.pending_transaction_info.return_value = {
        "confirmed-round": 101,
        "pool-error": "",
    }
    algod.status_after_block.return_value = {"last-round": 101}
    algod.send_raw_transaction.side_effect = lambda txn: "TXID"
    return algod


@pytest.fixture
def mock_indexer(signing_account):
    """Fixture providing an indexer client for an asset managed by signing_account"""
    indexer = MagicMock()
    indexer.search_asset_transactions.return_value = {"transactions": []}
    indexer.asset_info.return_value = {
        "asset": {
            "index": 1234,
            "params": {
                "creator": signing_account.address,
                "manager": signing_account.address,
                "reserve": signing_account.address,
                "freeze": signing_account.address,
                "clawback": signing_account.address,
                "total": 1,
                "decimals": 0,
            },
        }
    }
    return indexer


@pytest.fixture(autouse=True)
def isolate_config_dir(monkeypatch):
    """Run tests with an isolated configuration directory."""
    for name in (
        "ARC69_ALGOD_URL",
        "ARC69_ALGOD_TOKEN",
        "ARC69_INDEXER_URL",
        "ARC69_INDEXER_TOKEN",
        "ARC69_CONFIRMATION_ROUNDS",
    ):
        monkeypatch.delenv(name, raising=False)

    with tempfile.TemporaryDirectory(prefix="arc69-test-") as tmp_dir:
        monkeypatch.setenv("ARC69_CONFIG_DIR", str(Path(tmp_dir)))
        yield


@pytest.fixture
def note_encoder():
    """Fixture providing the note encoder used to build fake indexer responses"""
    return encode_note
