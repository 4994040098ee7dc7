"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from indexer.observability.correlation import get_correlation_id, set_correlation_id
from indexer.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
