"""
Base classes for blockchain batch calling.

This module provides the request/result types shared by the batchers and an
abstract interface for packing many contract reads into a single eth.call().
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3

from .errors import BatchSubmissionFailed, ErrorHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadRequest:
    """A single contract read, described but not executed."""

    target: str
    function_signature: str
    arguments: Tuple[Any, ...] = ()
    output_types: Tuple[str, ...] = ("uint256",)
    correlation_id: int = 0

    @property
    def input_types(self) -> List[str]:
        """Argument types parsed from the function signature."""
        inner = self.function_signature[self.function_signature.index("(") + 1 : -1]
        return _split_types(inner)

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.function_signature)

    def calldata(self) -> bytes:
        """Selector followed by the ABI encoded arguments."""
        return self.selector + encode(self.input_types, list(self.arguments))


def _split_types(type_list: str) -> List[str]:
    """Split a comma separated ABI type list, respecting tuple parentheses."""
    types, depth, current = [], 0, ""
    for char in type_list:
        if char == "," and depth == 0:
            types.append(current)
            current = ""
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current += char
    if current:
        types.append(current)
    return types


@dataclass
class BatchResult:
    """Result from a batch operation.

    ``results[i]`` is the decoded return value of the i-th submitted request.
    """

    block_number: int
    results: Tuple[Any, ...] = field(default_factory=tuple)
    timestamp: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self.results)


@dataclass
class BatchConfig:
    """Configuration for batch operations."""

    timeout: float = 30.0


class BaseBatcher(ABC):
    """
    Abstract base class for blockchain batch operations.

    A batcher turns N read requests into exactly one RPC round trip.
    """

    def __init__(self, web3: Web3, config: Optional[BatchConfig] = None):
        self.web3 = web3
        self.config = config or BatchConfig()
        self.logger = logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")
        self.error_handler = ErrorHandler(self.logger)

    @abstractmethod
    async def aggregate(
        self,
        requests: Sequence[ReadRequest],
        block_identifier: Union[int, str] = "latest",
    ) -> BatchResult:
        """
        Execute all requests in a single call.

        Args:
            requests: Ordered read requests
            block_identifier: Block to call at

        Returns:
            BatchResult with one decoded value per request, in order
        """
        pass

    def _validate_envelope(self, requests: Sequence[ReadRequest]) -> None:
        """Check the batch is non-empty and correlation ids match positions."""
        if not requests:
            raise BatchSubmissionFailed("Cannot submit an empty batch")

        for index, request in enumerate(requests):
            if request.correlation_id != index:
                raise BatchSubmissionFailed(
                    f"Request at position {index} has correlation id "
                    f"{request.correlation_id}"
                )
