"""Query and aggregation over an in-memory sequence of transactions.

:class:`TransactionAnalyzer` owns an append-only list of
:class:`~transaction_analysis.models.Transaction` values. Every query is a
fresh scan of that list; nothing is indexed or cached between calls.

Sentinels from :mod:`.coercion` flow through unchanged: a ``NaN`` amount makes
any sum or average it takes part in ``NaN``, and a transaction whose date did
not parse is left out of every date-based query, month ranking included.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Any

from .coercion import coerce_date
from .logging_setup import get_logger
from .models import CREDIT, DEBIT, EQUAL, Transaction, TransactionRecord

_logger = get_logger("transaction_analysis.analyzer")


def _sum_amounts(transactions: Iterable[Transaction]) -> float:
    # Start from 0.0 so empty input yields a float; NaN propagates through +.
    return sum((t.amount for t in transactions), 0.0)


def _busiest_month(transactions: Iterable[Transaction]) -> str | None:
    """Return the month key with the most transactions, earliest-seen on ties."""

    # Counter keeps first-insertion order and sorted() is stable, so equal
    # counts stay in the order their month first appeared.
    counts = Counter(t.month_key for t in transactions if t.month_key is not None)
    if not counts:
        return None
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[0][0]


class TransactionAnalyzer:
    """Holds transactions in insertion order and answers queries over them.

    Parameters
    ----------
    records:
        Raw records (or existing transactions) to seed the analyzer with. Each
        one is converted into a new :class:`Transaction`, in input order.

    Notes
    -----
    Not synchronized. A host that appends from one thread while querying from
    another must serialize those calls itself.
    """

    def __init__(self, records: Iterable[TransactionRecord | Transaction] = ()) -> None:
        self._transactions: list[Transaction] = [Transaction.from_record(r) for r in records]
        _logger.debug("analyzer created with %d transactions", len(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transactions={len(self._transactions)})"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_transaction(self, record: TransactionRecord | Transaction) -> None:
        """Append a new transaction built from ``record``."""

        tx = Transaction.from_record(record)
        self._transactions.append(tx)
        _logger.debug("added transaction id=%r (now %d)", tx.id, len(self._transactions))

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def all_transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of every transaction, in insertion order.

        The tuple does not change when more transactions are appended later.
        """

        return tuple(self._transactions)

    def unique_types(self) -> list[str]:
        """Distinct ``type`` labels, in the order they first appear."""

        return list(dict.fromkeys(t.type for t in self._transactions))

    def all_descriptions(self) -> list[Any]:
        return [t.description for t in self._transactions]

    def find_by_id(self, transaction_id: Any) -> Transaction | None:
        """First transaction whose ``id`` equals ``transaction_id``, else ``None``."""

        for t in self._transactions:
            if t.id == transaction_id:
                return t
        _logger.debug("no transaction with id=%r", transaction_id)
        return None

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def transactions_by_type(self, type_: str) -> list[Transaction]:
        return [t for t in self._transactions if t.type == type_]

    def transactions_by_merchant(self, name: str) -> list[Transaction]:
        return [t for t in self._transactions if t.merchant == name]

    def transactions_by_amount_range(
        self, min_amount: float, max_amount: float
    ) -> list[Transaction]:
        """Transactions with ``min_amount <= amount <= max_amount``.

        ``NaN`` amounts never fall inside a range.
        """

        return [t for t in self._transactions if min_amount <= t.amount <= max_amount]

    def transactions_in_date_range(self, start: Any, end: Any) -> list[Transaction]:
        """Transactions dated within ``[start, end]``, both ends inclusive.

        Bounds are parsed like ``transaction_date``; an unparseable bound
        matches nothing.
        """

        lo, hi = coerce_date(start), coerce_date(end)
        if lo is None or hi is None:
            return []
        return [t for t in self._transactions if t.date is not None and lo <= t.date <= hi]

    def transactions_before(self, date: Any) -> list[Transaction]:
        """Transactions dated strictly before ``date``."""

        cutoff = coerce_date(date)
        if cutoff is None:
            return []
        return [t for t in self._transactions if t.date is not None and t.date < cutoff]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def total_amount(self) -> float:
        return _sum_amounts(self._transactions)

    def total_amount_by_date(
        self,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
    ) -> float:
        """Sum of amounts whose date matches every component given.

        Omitted components match anything, so with no arguments this equals
        :meth:`total_amount`. Invalid dates match only that case.
        """

        if year is None and month is None and day is None:
            return self.total_amount()

        def matches(t: Transaction) -> bool:
            d = t.date
            if d is None:
                return False
            return (
                (year is None or d.year == year)
                and (month is None or d.month == month)
                and (day is None or d.day == day)
            )

        return _sum_amounts(t for t in self._transactions if matches(t))

    def average_amount(self) -> float:
        """Mean amount, or ``0.0`` when there are no transactions."""

        if not self._transactions:
            return 0.0
        return self.total_amount() / len(self._transactions)

    def total_debit_amount(self) -> float:
        return _sum_amounts(self.transactions_by_type(DEBIT))

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def most_active_month(self) -> str | None:
        """Busiest ``"YYYY-M"`` month by transaction count, or ``None`` if empty."""

        return _busiest_month(self._transactions)

    def most_active_debit_month(self) -> str | None:
        """Like :meth:`most_active_month`, counting debit transactions only."""

        return _busiest_month(self.transactions_by_type(DEBIT))

    def dominant_type(self) -> str:
        """``"debit"`` or ``"credit"``, whichever occurs more, else ``"equal"``.

        Labels other than debit/credit are ignored.
        """

        debits = sum(1 for t in self._transactions if t.type == DEBIT)
        credits = sum(1 for t in self._transactions if t.type == CREDIT)
        if debits > credits:
            return DEBIT
        if credits > debits:
            return CREDIT
        return EQUAL


__all__ = ["TransactionAnalyzer"]
