"""
Multicall3 batch aggregator.

This module packs an ordered list of read requests into a single
``aggregate((address,bytes)[])`` call against a Multicall3 deployment and
splits the combined response back into one decoded value per request.

The request order is the only correlation carried on the wire, so the
decoded results are always returned in submission order.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import Any, List, Optional, Sequence, Tuple, Union

import requests
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3
from web3.exceptions import ContractLogicError

from .base import BaseBatcher, BatchConfig, BatchResult, ReadRequest
from .errors import BatchDecodeFailed, BatchSubmissionFailed, BatchTimeout

MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

AGGREGATE_SIGNATURE = "aggregate((address,bytes)[])"
AGGREGATE_SELECTOR = function_signature_to_4byte_selector(AGGREGATE_SIGNATURE)
AGGREGATE_OUTPUT_TYPES = ["uint256", "bytes[]"]


class MulticallBatcher(BaseBatcher):
    """
    Batch aggregator backed by the Multicall3 ``aggregate`` primitive.

    ``aggregate`` is all-or-nothing: if any entry reverts the node reports a
    revert for the whole bundle and no partial results are exposed.
    """

    def __init__(
        self,
        web3: Web3,
        multicall_address: str = MULTICALL3_ADDRESS,
        config: Optional[BatchConfig] = None,
    ):
        """
        Initialize the multicall batcher.

        Args:
            web3: Web3 instance
            multicall_address: Address of the Multicall3 contract
            config: Batch configuration
        """
        super().__init__(web3, config)
        self.multicall_address = Web3.to_checksum_address(multicall_address)

    async def aggregate(
        self,
        requests: Sequence[ReadRequest],
        block_identifier: Union[int, str] = "latest",
    ) -> BatchResult:
        """
        Execute all requests in one eth.call and decode the results.

        Args:
            requests: Ordered read requests, correlation ids equal to positions
            block_identifier: Block to call at

        Returns:
            BatchResult with the block number and one decoded value per request

        Raises:
            BatchSubmissionFailed: The bundle could not be built or sent
            BatchDecodeFailed: An entry reverted or its payload did not decode
            BatchTimeout: The call exceeded ``config.timeout``
        """
        self._validate_envelope(requests)

        call_data = self._prepare_call_data(requests)
        raw_response = await self._make_batch_call(call_data, block_identifier)
        block_number, results = self._decode_response(raw_response, requests)

        self.logger.info(
            f"Multicall returned {len(results)} results at block {block_number}"
        )

        return BatchResult(
            block_number=block_number,
            results=tuple(results),
            timestamp=datetime.now(timezone.utc),
        )

    def _prepare_call_data(self, requests: Sequence[ReadRequest]) -> bytes:
        """
        Encode the requests as a single Multicall3 aggregate call.

        Args:
            requests: Ordered read requests

        Returns:
            Complete call data as bytes
        """
        try:
            calls = [
                (Web3.to_checksum_address(request.target), request.calldata())
                for request in requests
            ]
            return AGGREGATE_SELECTOR + encode(["(address,bytes)[]"], [calls])
        except Exception as e:
            self.logger.error(f"Failed to prepare multicall data: {e}")
            raise BatchSubmissionFailed(f"Failed to prepare multicall data: {e}") from e

    async def _make_batch_call(
        self, call_data: bytes, block_identifier: Union[int, str] = "latest"
    ) -> bytes:
        """
        Send the bundle to the node, bounded by the configured timeout.

        Args:
            call_data: Encoded aggregate call
            block_identifier: Block to call at

        Returns:
            Raw bytes response from the call

        Both the asyncio deadline and a transport level timeout raised by the
        HTTP provider are reported as BatchTimeout.
        """
        transaction = {"to": self.multicall_address, "data": call_data}
        context = {
            "multicall": self.multicall_address,
            "block_identifier": block_identifier,
            "timeout": self.config.timeout,
        }

        # Own executor so a call abandoned at the deadline is never joined
        # by the event loop's default executor shutdown.
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="multicall")
        loop = asyncio.get_running_loop()

        try:
            return await asyncio.wait_for(
                loop.run_in_executor(
                    executor, partial(self.web3.eth.call, transaction, block_identifier)
                ),
                timeout=self.config.timeout,
            )
        except (asyncio.TimeoutError, TimeoutError, requests.exceptions.Timeout) as e:
            error = BatchTimeout(
                f"Multicall did not complete within {self.config.timeout}s",
                timeout=self.config.timeout,
            )
            self.error_handler.log_error(error, context)
            raise error from e
        except ContractLogicError as e:
            error = BatchDecodeFailed(f"Multicall entry reverted: {e}")
            self.error_handler.log_error(error, context)
            raise error from e
        except Exception as e:
            error = BatchSubmissionFailed(f"Multicall submission failed: {e}")
            self.error_handler.log_error(e, context)
            raise error from e
        finally:
            executor.shutdown(wait=False)

    def _decode_response(
        self, raw_response: bytes, requests: Sequence[ReadRequest]
    ) -> Tuple[int, List[Any]]:
        """
        Split the aggregate response into one decoded value per request.

        Args:
            raw_response: Raw bytes response from eth.call()
            requests: Read requests in the same order as submitted

        Returns:
            Block number and the decoded values in submission order
        """
        try:
            block_number, return_data = decode(AGGREGATE_OUTPUT_TYPES, bytes(raw_response))
        except (DecodingError, ValueError, TypeError) as e:
            self.logger.error(f"Failed to decode multicall response: {e}")
            raise BatchDecodeFailed(f"Failed to decode multicall response: {e}") from e

        if len(return_data) != len(requests):
            raise BatchDecodeFailed(
                f"Multicall returned {len(return_data)} entries for "
                f"{len(requests)} requests"
            )

        results = []
        for request, payload in zip(requests, return_data):
            try:
                values = decode(list(request.output_types), payload)
            except (DecodingError, ValueError, TypeError) as e:
                self.logger.error(
                    f"Failed to decode entry {request.correlation_id} "
                    f"({request.function_signature}): {e}"
                )
                raise BatchDecodeFailed(
                    f"Failed to decode entry {request.correlation_id}: {e}"
                ) from e

            results.append(values[0] if len(values) == 1 else tuple(values))

        return block_number, results


# Convenience function for easy usage
async def aggregate_reads(
    web3: Web3,
    requests: Sequence[ReadRequest],
    multicall_address: str = MULTICALL3_ADDRESS,
    block_identifier: Union[int, str] = "latest",
    timeout: float = 30.0,
) -> BatchResult:
    """
    Convenience function to run a batch of reads through Multicall3.

    Args:
        web3: Web3 instance
        requests: Ordered read requests
        multicall_address: Address of the Multicall3 contract
        block_identifier: Block to call at
        timeout: Deadline for the combined call in seconds

    Returns:
        BatchResult with one decoded value per request
    """
    batcher = MulticallBatcher(
        web3, multicall_address=multicall_address, config=BatchConfig(timeout=timeout)
    )
    return await batcher.aggregate(requests, block_identifier)
