"""
Configuration manager for poolQuotes.

This module combines the base, chain and quote settings into a single object
that is built once at startup and passed to the quote pipeline.
"""

import logging
from decimal import Decimal
from typing import Dict, Any, Optional

from web3 import Web3

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .quotes import QuoteConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized configuration manager that combines all configuration classes.

    All environment variables are read here; the components that receive a
    ConfigManager never read the environment themselves.
    """

    def __init__(
        self,
        environment: Optional[str] = None,
        log_level: Optional[str] = None,
        rpc_url: Optional[str] = None,
    ):
        """
        Initialize the configuration manager.

        Args:
            environment: Override ENVIRONMENT (local, dev, staging, production)
            log_level: Override LOG_LEVEL
            rpc_url: Override ETHEREUM_RPC_URL
        """
        self._overrides = {
            key: value
            for key, value in (("ENVIRONMENT", environment), ("LOG_LEVEL", log_level))
            if value
        }
        self._rpc_url = rpc_url
        self._base_config = None
        self._chain_config = None
        self._quote_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            self._base_config = BaseConfig(**self._overrides)

            chain_overrides = dict(self._overrides)
            if self._rpc_url:
                chain_overrides["ETHEREUM_RPC_URL"] = self._rpc_url
            self._chain_config = ChainConfig(**chain_overrides)

            self._quote_config = QuoteConfig(**self._overrides)

            logger.info(f"Configuration initialized for environment: {self.environment}")

        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}") from e

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        """Get base configuration."""
        return self._base_config

    @property
    def chains(self) -> ChainConfig:
        """Get chain configuration."""
        return self._chain_config

    @property
    def quotes(self) -> QuoteConfig:
        """Get quote configuration."""
        return self._quote_config

    def validate_configuration(self) -> bool:
        """
        Validate all configuration settings.

        Returns:
            True if all configurations are valid

        Raises:
            ConfigError: If any configuration is invalid
        """
        if not self.chains.ETHEREUM_RPC_URL:
            raise ConfigError("RPC URL not configured")

        if not self.quotes.POOLS:
            raise ConfigError("No pools configured")

        addresses = {
            "QUOTER_ADDRESS": self.quotes.QUOTER_ADDRESS,
            "MULTICALL_ADDRESS": self.quotes.MULTICALL_ADDRESS,
        }
        for index, pool in enumerate(self.quotes.POOLS):
            addresses[f"QUOTE_POOLS[{index}]"] = pool

        for name, address in addresses.items():
            if not Web3.is_address(address):
                raise ConfigError(f"{name} is not a valid address: {address}")

        if not self.quotes.INPUT_AMOUNT.is_finite() or self.quotes.INPUT_AMOUNT <= Decimal(0):
            raise ConfigError(f"QUOTE_INPUT_AMOUNT must be positive, got: {self.quotes.INPUT_AMOUNT}")

        if self.quotes.BATCH_TIMEOUT_SECONDS <= 0:
            raise ConfigError(
                f"BATCH_TIMEOUT_SECONDS must be positive, got: {self.quotes.BATCH_TIMEOUT_SECONDS}"
            )

        logger.info("Configuration validation successful")
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "base": self.base.to_dict() if self.base else {},
            "chains": self.chains.to_dict() if self.chains else {},
            "quotes": self.quotes.to_dict() if self.quotes else {},
        }

    def __repr__(self) -> str:
        """String representation of the configuration manager."""
        return f"ConfigManager(environment={self.environment})"
