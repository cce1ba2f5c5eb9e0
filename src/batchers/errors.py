"""
Error handling utilities for batch calling operations.

This module provides the exception classes raised by the multicall
aggregator and a small helper that classifies and logs failures.
"""

from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class BatchError(Exception):
    """Base exception for batch operations."""
    pass


class BatchSubmissionFailed(BatchError):
    """Raised when the combined call cannot be built or sent to the node."""
    pass


class BatchDecodeFailed(BatchError):
    """Raised when an entry reverted or the combined payload cannot be split."""
    pass


class BatchTimeout(BatchError):
    """Raised when the combined call does not complete before its deadline."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class ErrorHandler:
    """
    Centralized error classification and logging for batch operations.

    Nothing here retries: every failure is reported once and then
    propagated to the caller.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """
        Classify an error into a category for logging.

        Args:
            error: Exception to classify

        Returns:
            Error category string
        """
        if isinstance(error, BatchTimeout):
            return 'timeout'
        if isinstance(error, BatchDecodeFailed):
            return 'contract'

        error_str = str(error).lower()

        if any(keyword in error_str for keyword in ['revert', 'execution reverted', 'out of gas']):
            return 'contract'

        if any(keyword in error_str for keyword in ['connection', 'timeout', 'network', 'dns']):
            return 'network'

        if any(keyword in error_str for keyword in ['invalid', 'bad request', '400']):
            return 'validation'

        return 'unknown'

    def log_error(self, error: Exception, context: Dict[str, Any]):
        """
        Log error with appropriate level and context.

        Args:
            error: Exception to log
            context: Additional context for logging
        """
        error_category = self.classify_error(error)

        log_data = {
            'error_type': type(error).__name__,
            'error_category': error_category,
            'error_message': str(error),
            **context
        }

        if error_category == 'validation':
            self.logger.warning("Validation error occurred", extra=log_data)
        elif error_category == 'contract':
            self.logger.error("Contract execution failed", extra=log_data)
        else:
            self.logger.error("Batch operation error", extra=log_data)
