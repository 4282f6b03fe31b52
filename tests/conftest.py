"""Shared fixtures for the ``transaction_analysis`` test suite.

``seed_records`` is the three-transaction dataset most tests start from and
``fourth_record`` is the one appended in the end-to-end scenario. Logging
configuration is process-global, so an autouse fixture resets it around every
test to keep tests from leaking handlers into each other.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from tests.helpers.records import make_record
from transaction_analysis import TransactionAnalyzer
from transaction_analysis.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("TRANSACTION_ANALYSIS_LOG_LEVEL", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def seed_records() -> list[dict[str, Any]]:
    return [
        make_record("1", "2021-01-01", "10", "debit", "A", "M", "C"),
        make_record("2", "2021-01-02", "20", "credit", "B", "N", "C2"),
        make_record("3", "2021-01-01", "30", "debit", "C", "M", "C"),
    ]


@pytest.fixture
def fourth_record() -> dict[str, Any]:
    return make_record("4", "2021-01-03", "40", "credit", "D", "O", "C3")


@pytest.fixture
def analyzer(seed_records, fourth_record) -> TransactionAnalyzer:
    ana = TransactionAnalyzer(seed_records)
    ana.add_transaction(fourth_record)
    return ana
