"""Input validation utilities for asset IDs, addresses and round budgets."""

from dataclasses import dataclass
from typing import Any

from algosdk import encoding


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


class AssetIdValidator:
    MAX_ASSET_ID = 2**64 - 1

    @staticmethod
    def validate(value: str | int) -> ValidationResult:
        if isinstance(value, bool):
            return ValidationResult(
                is_valid=False,
                error_message="Asset ID must be an integer",
            )

        if isinstance(value, int):
            asset_id = value
        else:
            if not value or not value.strip():
                return ValidationResult(
                    is_valid=False,
                    error_message="Asset ID is required",
                )

            normalized = value.strip().replace(",", "").replace("_", "")
            if not normalized.isdigit():
                return ValidationResult(
                    is_valid=False,
                    error_message="Asset ID must be a positive whole number",
                )
            asset_id = int(normalized)

        if asset_id <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="Asset ID must be a positive integer",
            )

        if asset_id > AssetIdValidator.MAX_ASSET_ID:
            return ValidationResult(
                is_valid=False,
                error_message="Asset ID exceeds the uint64 range",
            )

        return ValidationResult(is_valid=True, normalized_value=asset_id)


class AddressValidator:
    ADDRESS_LENGTH = 58

    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Address is required",
            )

        normalized = value.strip().upper()

        if len(normalized) != AddressValidator.ADDRESS_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Address must be {AddressValidator.ADDRESS_LENGTH} characters",
            )

        if not encoding.is_valid_address(normalized):
            return ValidationResult(
                is_valid=False,
                error_message="Address checksum is invalid",
            )

        return ValidationResult(is_valid=True, normalized_value=normalized)


class RoundsValidator:
    @staticmethod
    def validate(value: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, int):
            return ValidationResult(
                is_valid=False,
                error_message="Round budget must be an integer",
            )
        if value <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="Round budget must be a positive number of rounds",
            )
        return ValidationResult(is_valid=True, normalized_value=value)
