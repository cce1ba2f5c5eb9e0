"""
Blockchain batch calling utilities.

This package packs independent contract reads into a single multicall
round trip and decodes the combined response back into ordered results.
"""

from .base import BaseBatcher, BatchResult, BatchConfig, ReadRequest
from .errors import BatchError, BatchSubmissionFailed, BatchDecodeFailed, BatchTimeout
from .multicall import MulticallBatcher, MULTICALL3_ADDRESS, aggregate_reads

__all__ = [
    'BaseBatcher',
    'BatchResult',
    'BatchConfig',
    'ReadRequest',
    'BatchError',
    'BatchSubmissionFailed',
    'BatchDecodeFailed',
    'BatchTimeout',
    'MulticallBatcher',
    'MULTICALL3_ADDRESS',
    'aggregate_reads'
]
