"""
Node connection configuration for poolQuotes.
"""

from dataclasses import dataclass, field
from typing import Optional

from web3 import Web3

from .base import BaseConfig


def _default_rpc_url() -> str:
    # INFURA_URL is accepted for compatibility with existing .env files
    return BaseConfig.get_env(
        "ETHEREUM_RPC_URL", BaseConfig.get_env("INFURA_URL", "http://localhost:8545")
    )


@dataclass
class ChainConfig(BaseConfig):
    """Connection settings for the Ethereum node the quotes are read from."""

    ETHEREUM_RPC_URL: str = field(default_factory=_default_rpc_url)

    # HTTP timeout for every JSON-RPC request
    RPC_TIMEOUT_SECONDS: float = field(
        default_factory=lambda: BaseConfig.get_env_float("RPC_TIMEOUT_SECONDS", 30.0)
    )

    def create_web3(self, timeout: Optional[float] = None) -> Web3:
        """
        Create a Web3 HTTP connection to ``ETHEREUM_RPC_URL``.

        Args:
            timeout: Per-request HTTP timeout, capped at ``RPC_TIMEOUT_SECONDS``
        """
        request_timeout = self.RPC_TIMEOUT_SECONDS
        if timeout is not None:
            request_timeout = min(request_timeout, timeout)

        return Web3(
            Web3.HTTPProvider(
                self.ETHEREUM_RPC_URL, request_kwargs={"timeout": request_timeout}
            )
        )
