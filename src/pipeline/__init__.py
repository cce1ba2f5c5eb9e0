"""
Single pass quote pipeline and its command-line entry point.
"""

from .driver import QuotePipeline, QuoteReport

__all__ = ["QuotePipeline", "QuoteReport"]
