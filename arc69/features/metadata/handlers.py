"""Metadata event handlers for the ARC69 terminal UI."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from arc69.account import SigningAccount
from arc69.errors import ConfirmationError
from arc69.features.metadata.document import Metadata
from arc69.features.metadata.screen import (
    MetadataDetailScreen,
    MetadataHistoryScreen,
    UpdateMetadataScreen,
    UpdateMetadataSubmitted,
)
from arc69.features.metadata.service import Arc69Service, MetadataRecord
from arc69.screens import LoadingScreen, TransactionResultScreen
from arc69.shared.logging import format_error_for_user, get_logger

if TYPE_CHECKING:
    from arc69.__main__ import Arc69App

logger = get_logger(__name__)


def describe_failure(error: Exception) -> str:
    """User-facing text for ``error``, reporting how confirmation ended when it failed."""
    cause = error.__cause__
    if isinstance(cause, ConfirmationError):
        return format_error_for_user(cause)
    return format_error_for_user(error)


class MetadataHandlersMixin:
    """Mixin class providing metadata-related event handlers for Arc69App."""

    service: Arc69Service
    explorer_url: str

    def _dismiss_loading(self: "Arc69App") -> None:
        if isinstance(self.screen, LoadingScreen):
            self.pop_screen()

    def _notify_failure(self: "Arc69App", action: str, error: Exception) -> None:
        logger.error("%s failed: %s", action, error)
        self.notify(
            f"{action} failed: {error}\n{describe_failure(error)}",
            severity="error",
        )

    def show_metadata(self: "Arc69App", asset_id: int) -> None:
        self.push_screen(LoadingScreen(f"Fetching metadata for asset {asset_id}..."))

        def worker() -> None:
            try:
                metadata = self.service.fetch(asset_id)
                self.call_from_thread(self._on_metadata_loaded, asset_id, metadata, None)
            except Exception as e:
                self.call_from_thread(self._on_metadata_loaded, asset_id, None, e)

        threading.Thread(target=worker, daemon=True).start()

    def _on_metadata_loaded(
        self: "Arc69App",
        asset_id: int,
        metadata: Metadata | None,
        error: Exception | None,
    ) -> None:
        self._dismiss_loading()

        if error is not None:
            self._notify_failure("Fetching metadata", error)
            return

        if metadata is not None:
            self.push_screen(MetadataDetailScreen(asset_id, metadata))

    def show_metadata_history(self: "Arc69App", asset_id: int) -> None:
        self.push_screen(LoadingScreen(f"Fetching history for asset {asset_id}..."))

        def worker() -> None:
            try:
                records = self.service.fetch_history(asset_id)
                self.call_from_thread(self._on_history_loaded, asset_id, records, None)
            except Exception as e:
                self.call_from_thread(self._on_history_loaded, asset_id, None, e)

        threading.Thread(target=worker, daemon=True).start()

    def _on_history_loaded(
        self: "Arc69App",
        asset_id: int,
        records: list[MetadataRecord] | None,
        error: Exception | None,
    ) -> None:
        self._dismiss_loading()

        if error is not None:
            self._notify_failure("Fetching history", error)
            return

        if not records:
            self.notify(
                f"No ARC69 metadata found for asset {asset_id}",
                severity="information",
            )
            return

        self.push_screen(MetadataHistoryScreen(asset_id, records))

    def show_update_metadata(self: "Arc69App", asset_id: int) -> None:
        self.push_screen(UpdateMetadataScreen(asset_id))

    def on_update_metadata_submitted(
        self: "Arc69App", event: UpdateMetadataSubmitted
    ) -> None:
        self.push_screen(LoadingScreen("Publishing metadata and waiting for confirmation..."))

        def worker() -> None:
            try:
                signer = SigningAccount.from_mnemonic(event.mnemonic)
                metadata = Metadata.from_json(event.document)
                tx_id = self.service.update(signer, event.asset_id, metadata)
                self.call_from_thread(self._on_metadata_updated, tx_id, None)
            except Exception as e:
                self.call_from_thread(self._on_metadata_updated, None, e)

        threading.Thread(target=worker, daemon=True).start()

    def _on_metadata_updated(
        self: "Arc69App", tx_id: str | None, error: Exception | None
    ) -> None:
        self._dismiss_loading()

        if error is not None:
            self._notify_failure("Publishing metadata", error)
            return

        if tx_id:
            self.push_screen(TransactionResultScreen(tx_id, self.explorer_url))
            self.notify("Metadata updated!", severity="information")
