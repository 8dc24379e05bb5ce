"""Generic screens shared by the ARC69 terminal UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]


class LoadingScreen(ModalScreen):
    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Label(f"⏳ {self.message}", id="loading-message")


class TransactionResultScreen(BaseModalScreen):
    def __init__(self, tx_id: str, explorer_base_url: str):
        super().__init__()
        self.tx_id = tx_id
        self.explorer_base_url = explorer_base_url

    def compose(self) -> ComposeResult:
        yield Label("✅ Transaction Confirmed!", id="result-title")
        yield Label("Transaction ID:")
        yield Static(self.tx_id, id="tx-id-display")
        yield Label(f"Explorer: {self.explorer_base_url}/tx/{self.tx_id}")
        yield Button("❌ Close", id="close-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-button":
            self.app.pop_screen()
