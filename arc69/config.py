"""Configuration for node endpoints, tokens and confirmation behaviour."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from arc69.shared.logging import get_logger
from arc69.shared.network import RetryConfig, TimeoutConfig

logger = get_logger(__name__)

DEFAULT_ALGOD_URL = "https://testnet-api.algonode.cloud"
DEFAULT_INDEXER_URL = "https://testnet-idx.algonode.cloud"
DEFAULT_CONFIRMATION_ROUNDS = 4
CONFIG_FILENAME = "config.json"


def resolve_config_dir(config_dir: str | Path | None = None) -> Path:
    if config_dir:
        return Path(config_dir).expanduser()

    env_dir = os.getenv("ARC69_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()

    return Path.home() / ".arc69"


@dataclass
class Arc69Config:
    algod_url: str = DEFAULT_ALGOD_URL
    algod_token: str = ""
    indexer_url: str = DEFAULT_INDEXER_URL
    indexer_token: str = ""
    confirmation_rounds: int = DEFAULT_CONFIRMATION_ROUNDS
    strict_empty_address_check: bool = True
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self):
        if isinstance(self.confirmation_rounds, bool) or not isinstance(
            self.confirmation_rounds, int
        ):
            raise ValueError("confirmation_rounds must be an integer")
        if self.confirmation_rounds <= 0:
            raise ValueError("confirmation_rounds must be a positive number of rounds")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Arc69Config":
        timeout_cfg = data.get("timeout") or {}
        retry_cfg = data.get("retry") or {}
        return cls(
            algod_url=data.get("algod_url", DEFAULT_ALGOD_URL),
            algod_token=data.get("algod_token", ""),
            indexer_url=data.get("indexer_url", DEFAULT_INDEXER_URL),
            indexer_token=data.get("indexer_token", ""),
            confirmation_rounds=data.get(
                "confirmation_rounds", DEFAULT_CONFIRMATION_ROUNDS
            ),
            strict_empty_address_check=data.get("strict_empty_address_check", True),
            timeout_config=TimeoutConfig(
                connect_timeout=timeout_cfg.get("connect_timeout", 5.0),
                read_timeout=timeout_cfg.get("read_timeout", 15.0),
            ),
            retry_config=RetryConfig(
                max_retries=retry_cfg.get("max_retries", 3),
                base_delay=retry_cfg.get("base_delay", 1.0),
                max_delay=retry_cfg.get("max_delay", 30.0),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "algod_url": self.algod_url,
            "algod_token": self.algod_token,
            "indexer_url": self.indexer_url,
            "indexer_token": self.indexer_token,
            "confirmation_rounds": self.confirmation_rounds,
            "strict_empty_address_check": self.strict_empty_address_check,
            "timeout": {
                "connect_timeout": self.timeout_config.connect_timeout,
                "read_timeout": self.timeout_config.read_timeout,
            },
            "retry": {
                "max_retries": self.retry_config.max_retries,
                "base_delay": self.retry_config.base_delay,
                "max_delay": self.retry_config.max_delay,
            },
        }

    def apply_environment(self) -> "Arc69Config":
        """Override fields from ARC69_* environment variables in place."""
        self.algod_url = os.getenv("ARC69_ALGOD_URL", self.algod_url)
        self.algod_token = os.getenv("ARC69_ALGOD_TOKEN", self.algod_token)
        self.indexer_url = os.getenv("ARC69_INDEXER_URL", self.indexer_url)
        self.indexer_token = os.getenv("ARC69_INDEXER_TOKEN", self.indexer_token)

        rounds = os.getenv("ARC69_CONFIRMATION_ROUNDS")
        if rounds:
            try:
                parsed = int(rounds)
            except ValueError:
                logger.warning("Ignoring invalid ARC69_CONFIRMATION_ROUNDS: %s", rounds)
            else:
                if parsed > 0:
                    self.confirmation_rounds = parsed
                else:
                    logger.warning(
                        "Ignoring non-positive ARC69_CONFIRMATION_ROUNDS: %s", rounds
                    )
        return self

    @classmethod
    def from_environment(cls) -> "Arc69Config":
        return cls().apply_environment()

    @classmethod
    def load(cls, config_dir: str | Path | None = None) -> "Arc69Config":
        config_file = resolve_config_dir(config_dir) / CONFIG_FILENAME
        if config_file.exists():
            with open(config_file, "r", encoding="utf-8") as f:
                config = cls.from_dict(json.load(f))
            logger.debug("Loaded configuration from %s", config_file)
        else:
            config = cls()
        return config.apply_environment()

    def save(self, config_dir: str | Path | None = None) -> Path:
        directory = resolve_config_dir(config_dir)
        directory.mkdir(parents=True, exist_ok=True)
        config_file = directory / CONFIG_FILENAME
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Saved configuration to %s", config_file)
        return config_file
