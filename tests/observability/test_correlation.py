"""
Test suite for correlation ID propagation and log record injection.

System role: Verification of observability helpers
"""

import logging

from indexer.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from indexer.observability.logger import CorrelationIdFilter


def test_set_correlation_id_uses_given_value():
    assert set_correlation_id("abc-123") == "abc-123"
    assert get_correlation_id() == "abc-123"
    clear_correlation_id()


def test_set_correlation_id_generates_value():
    correlation_id = set_correlation_id()
    assert correlation_id
    assert get_correlation_id() == correlation_id
    clear_correlation_id()


def test_clear_correlation_id():
    set_correlation_id("abc-123")
    clear_correlation_id()
    assert get_correlation_id() == ""


def test_filter_injects_correlation_id():
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)

    set_correlation_id("abc-123")
    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "abc-123"

    clear_correlation_id()
    CorrelationIdFilter().filter(record)
    assert record.correlation_id == "-"
