"""Public interface for the ``transaction_analysis`` package.

Re-exports the analyzer, the transaction model and the logging helpers as the
stable import surface. There is no runtime logic here, only symbol
re-exports.
"""

from .analyzer import TransactionAnalyzer
from .coercion import INVALID_DATE, coerce_amount, coerce_date, format_amount, month_key
from .logging_setup import configure_logging, get_logger
from .models import (
    CREDIT,
    DEBIT,
    EQUAL,
    RECORD_KEYS,
    Transaction,
    TransactionRecord,
    TransactionView,
)

__all__ = [
    # Analyzer
    "TransactionAnalyzer",
    # Models / types
    "Transaction",
    "TransactionRecord",
    "TransactionView",
    "RECORD_KEYS",
    "DEBIT",
    "CREDIT",
    "EQUAL",
    # Coercion
    "INVALID_DATE",
    "coerce_amount",
    "coerce_date",
    "format_amount",
    "month_key",
    # Logging
    "configure_logging",
    "get_logger",
]
