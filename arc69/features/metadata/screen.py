"""Metadata screens for the ARC69 terminal UI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Input, Label, Static, TextArea

from arc69.errors import PropertyError
from arc69.features.metadata.document import Metadata
from arc69.features.metadata.service import MetadataRecord
from arc69.screens import BaseModalScreen

if TYPE_CHECKING:
    from arc69.__main__ import Arc69App


@dataclass
class UpdateMetadataSubmitted:
    asset_id: int
    mnemonic: str
    document: str


def format_value(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class MetadataDetailScreen(BaseModalScreen):
    def __init__(self, asset_id: int, metadata: Metadata):
        super().__init__()
        self.asset_id = asset_id
        self.metadata = metadata

    def compose(self):
        meta = self.metadata
        yield Label(f"📝 ARC69 Metadata for asset {self.asset_id}")
        if not meta.is_valid():
            yield Static(f"Unexpected standard: {meta.standard!r}", markup=False)
        yield Static(f"Description: {meta.description}", markup=False)
        yield Static(f"External URL: {meta.external_url}", markup=False)
        yield Static(f"Media URL: {meta.media_url}", markup=False)
        yield Static(f"MIME Type: {meta.mime_type}", markup=False)
        yield DataTable(id="attributes-table")
        yield Label("Property path:")
        yield Input(placeholder="e.g. traits.color", id="property-path-input")
        yield Static("", id="property-result", markup=False)
        yield Horizontal(
            Button("Lookup", id="property-lookup-button", variant="primary"),
            Button("Edit", id="edit-metadata-button"),
            Button("Close", id="close-detail-button"),
        )

    def on_mount(self) -> None:
        table = self.query_one("#attributes-table", DataTable)
        table.add_column("Trait", key="trait")
        table.add_column("Value", key="value")
        for attribute in self.metadata.attributes:
            table.add_row(attribute.trait_type, format_value(attribute.value))

    def lookup_property(self, path: str) -> str:
        try:
            return format_value(self.metadata.property(path))
        except PropertyError as e:
            return f"Error: {e}"

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "property-path-input":
            self.query_one("#property-result", Static).update(
                self.lookup_property(event.value.strip())
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "property-lookup-button":
            path = self.query_one("#property-path-input", Input).value.strip()
            self.query_one("#property-result", Static).update(
                self.lookup_property(path)
            )
        elif event.button.id == "edit-metadata-button":
            self.app.push_screen(UpdateMetadataScreen(self.asset_id, self.metadata))
        elif event.button.id == "close-detail-button":
            self.app.pop_screen()


class MetadataHistoryScreen(BaseModalScreen):
    def __init__(self, asset_id: int, records: list[MetadataRecord]):
        super().__init__()
        self.asset_id = asset_id
        self.records = records

    def compose(self):
        yield Label(f"🕒 Metadata history for asset {self.asset_id}")
        yield DataTable(id="history-table")
        yield Horizontal(
            Button("View", id="view-history-button", variant="primary"),
            Button("Close", id="close-history-button"),
        )

    def on_mount(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.add_column("Round", key="round")
        table.add_column("Transaction", key="tx")
        table.add_column("Description", key="description")
        for record in self.records:
            description = record.metadata.description
            if len(description) > 30:
                description = description[:30] + "..."
            table.add_row(
                str(record.confirmed_round),
                record.tx_id,
                description,
                key=record.tx_id,
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "view-history-button":
            table = self.query_one("#history-table", DataTable)
            if 0 <= table.cursor_row < len(self.records):
                selected = self.records[table.cursor_row]
                self.app.push_screen(
                    MetadataDetailScreen(self.asset_id, selected.metadata)
                )
        elif event.button.id == "close-history-button":
            self.app.pop_screen()


class UpdateMetadataScreen(BaseModalScreen):
    def __init__(self, asset_id: int, metadata: Metadata | None = None):
        super().__init__()
        self.asset_id = asset_id
        self.metadata = metadata or Metadata()

    def compose(self):
        yield Label(f"✏️ Update ARC69 metadata for asset {self.asset_id}")
        yield Label("Manager mnemonic (25 words):")
        yield Input(password=True, id="mnemonic-input")
        yield Label("Metadata JSON:")
        yield TextArea(
            json.dumps(self.metadata.to_dict(), indent=2, ensure_ascii=False),
            id="metadata-json-input",
        )
        yield Horizontal(
            Button("Publish", id="update-metadata-submit", variant="primary"),
            Button("Cancel", id="update-metadata-cancel"),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "update-metadata-cancel":
            self.app.pop_screen()
        elif event.button.id == "update-metadata-submit":
            words = self.query_one("#mnemonic-input", Input).value.strip()
            document = self.query_one("#metadata-json-input", TextArea).text

            if not words:
                self.app.notify("Mnemonic is required", severity="error")
                return
            if not document.strip():
                self.app.notify("Metadata JSON is required", severity="error")
                return

            submitted_event = UpdateMetadataSubmitted(
                asset_id=self.asset_id,
                mnemonic=words,
                document=document,
            )
            self.app.pop_screen()
            cast("Arc69App", self.app).on_update_metadata_submitted(submitted_event)
