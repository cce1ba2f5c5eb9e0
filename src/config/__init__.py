"""
Configuration management for poolQuotes.

Example:
    from src.config import ConfigManager

    config = ConfigManager(rpc_url="https://rpc.example.org")
    config.validate_configuration()

    # Access chain settings
    web3 = config.chains.create_web3()

    # Access quote settings
    pools = config.quotes.POOLS
"""

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .manager import ConfigManager
from .quotes import QuoteConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "QuoteConfig",
    "ConfigManager",
]
