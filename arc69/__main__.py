"""Terminal UI entry point for the ARC69 toolkit."""

from __future__ import annotations

import threading

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Input, Label, Static

from arc69.config import Arc69Config
from arc69.features.metadata.handlers import MetadataHandlersMixin
from arc69.features.metadata.service import Arc69Service
from arc69.shared.clients import AlgodClient, IndexerClient
from arc69.shared.logging import get_logger
from arc69.shared.validation import AssetIdValidator
from arc69.styles import CSS

logger = get_logger(__name__)

TESTNET_EXPLORER_URL = "https://testnet.explorer.perawallet.app"
MAINNET_EXPLORER_URL = "https://explorer.perawallet.app"


def build_service(config: Arc69Config) -> tuple[Arc69Service, AlgodClient]:
    algod = AlgodClient(
        config.algod_url,
        config.algod_token,
        timeout_config=config.timeout_config,
        retry_config=config.retry_config,
    )
    indexer = IndexerClient(
        config.indexer_url,
        config.indexer_token,
        timeout_config=config.timeout_config,
        retry_config=config.retry_config,
    )
    return Arc69Service(algod=algod, indexer=indexer, config=config), algod


class Arc69App(MetadataHandlersMixin, App):
    CSS = CSS
    TITLE = "ARC69 Metadata"

    BINDINGS = [
        ("f", "fetch", "Fetch"),
        ("h", "history", "History"),
        ("u", "update", "Update"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: Arc69Config | None = None):
        super().__init__()
        self.config = config or Arc69Config.load()
        self.service, self.algod = build_service(self.config)
        self.explorer_url = (
            TESTNET_EXPLORER_URL
            if "testnet" in self.config.algod_url
            else MAINNET_EXPLORER_URL
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Connecting...", id="connection-status")
        yield Vertical(
            Label("Asset ID:"),
            Input(placeholder="e.g. 123456789", id="asset-id-input"),
            Horizontal(
                Button("Fetch", id="fetch-button", variant="primary"),
                Button("History", id="history-button"),
                Button("Update", id="update-button"),
            ),
            id="lookup-form",
        )
        yield Footer()

    def on_mount(self) -> None:
        def worker() -> None:
            try:
                result = self.algod.test_connection()
                text = f"{self.config.algod_url} | round {result['lastRound']}"
            except Exception as e:
                logger.warning("Node connection test failed: %s", e)
                text = f"{self.config.algod_url} | unreachable"
            self.call_from_thread(self._set_connection_status, text)

        threading.Thread(target=worker, daemon=True).start()

    def _set_connection_status(self, text: str) -> None:
        self.query_one("#connection-status", Static).update(text)

    def _read_asset_id(self) -> int | None:
        raw = self.query_one("#asset-id-input", Input).value
        result = AssetIdValidator.validate(raw)
        if not result.is_valid:
            self.notify(result.error_message or "Invalid asset ID", severity="error")
            return None
        return result.normalized_value

    def action_fetch(self) -> None:
        asset_id = self._read_asset_id()
        if asset_id is not None:
            self.show_metadata(asset_id)

    def action_history(self) -> None:
        asset_id = self._read_asset_id()
        if asset_id is not None:
            self.show_metadata_history(asset_id)

    def action_update(self) -> None:
        asset_id = self._read_asset_id()
        if asset_id is not None:
            self.show_update_metadata(asset_id)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "asset-id-input":
            self.action_fetch()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fetch-button":
            self.action_fetch()
        elif event.button.id == "history-button":
            self.action_history()
        elif event.button.id == "update-button":
            self.action_update()


def main():
    """Entry point for the application."""
    app = Arc69App()
    app.run()


if __name__ == "__main__":
    main()
