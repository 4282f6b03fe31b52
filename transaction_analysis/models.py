"""Data models and type aliases for ``transaction_analysis``.

A :class:`Transaction` is built from a plain mapping (see
:data:`TransactionRecord`) and normalizes two of its fields on the way in:
``date`` becomes a :class:`datetime.date` and ``amount`` becomes a ``float``.
Nothing else is validated. Malformed values turn into sentinels (``NaN`` for
amounts, ``None`` for dates) rather than errors; see :mod:`.coercion`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict

from .coercion import coerce_amount, coerce_date, format_amount
from .coercion import month_key as _month_key

# ---------------------------------------------------------------------------
# Recognized type labels
# ---------------------------------------------------------------------------

# ``Transaction.type`` is an open label; only these values carry meaning in
# aggregates. Any other string is stored and reported as-is.
DEBIT = "debit"
CREDIT = "credit"
EQUAL = "equal"

# ---------------------------------------------------------------------------
# Input record
# ---------------------------------------------------------------------------

RECORD_KEYS: tuple[str, ...] = (
    "transaction_id",
    "transaction_date",
    "transaction_amount",
    "transaction_type",
    "transaction_description",
    "merchant_name",
    "card_type",
)

TransactionRecord: TypeAlias = Mapping[str, Any]
"""A raw transaction as plain data, keyed by :data:`RECORD_KEYS`.

Missing keys read as ``None``; extra keys are ignored. ``transaction_amount``
may be a number or a numeric string, ``transaction_date`` an ISO date string
or a ``date``.
"""


# ---------------------------------------------------------------------------
# Serialized view
# ---------------------------------------------------------------------------


class TransactionView(BaseModel):
    """Canonical text shape of a transaction, in fixed key order.

    ``transaction_date`` is ``YYYY-MM-DD`` (``None`` when the date is
    invalid) and ``transaction_amount`` is a two-decimal string. The other
    fields pass through untouched.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    transaction_id: Any
    transaction_date: str | None
    transaction_amount: str
    transaction_type: Any
    transaction_description: Any
    merchant_name: Any
    card_type: Any


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """One financial movement.

    ``date`` and ``amount`` are coerced in ``__post_init__`` so that direct
    construction and :meth:`from_record` normalize identically.

    Attributes
    ----------
    id:
        Caller-supplied identifier; uniqueness is not checked.
    date:
        Calendar date, or ``None`` when the input did not parse.
    amount:
        Signed amount as ``float``; ``NaN`` when the input was not numeric.
    type:
        Category label, conventionally :data:`DEBIT` or :data:`CREDIT`.
    description, merchant, card_type:
        Free text.
    """

    id: Any
    date: dt.date | None
    amount: float
    type: str
    description: str
    merchant: str
    card_type: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", coerce_date(self.date))
        object.__setattr__(self, "amount", coerce_amount(self.amount))

    @classmethod
    def from_record(cls, record: TransactionRecord | Transaction) -> Transaction:
        """Build a fresh transaction from a raw record (or another transaction)."""

        if isinstance(record, Transaction):
            record = record.to_record()
        return cls(
            id=record.get("transaction_id"),
            date=record.get("transaction_date"),
            amount=record.get("transaction_amount"),
            type=record.get("transaction_type"),
            description=record.get("transaction_description"),
            merchant=record.get("merchant_name"),
            card_type=record.get("card_type"),
        )

    @property
    def month_key(self) -> str | None:
        return _month_key(self.date)

    def to_record(self) -> dict[str, Any]:
        """Return the plain-data record this transaction would be built from."""

        return {
            "transaction_id": self.id,
            "transaction_date": self.date.isoformat() if self.date is not None else None,
            "transaction_amount": self.amount,
            "transaction_type": self.type,
            "transaction_description": self.description,
            "merchant_name": self.merchant,
            "card_type": self.card_type,
        }

    def to_view(self) -> TransactionView:
        return TransactionView(
            transaction_id=self.id,
            transaction_date=self.date.isoformat() if self.date is not None else None,
            transaction_amount=format_amount(self.amount),
            transaction_type=self.type,
            transaction_description=self.description,
            merchant_name=self.merchant,
            card_type=self.card_type,
        )

    def serialize(self) -> str:
        """Return the canonical JSON text (two-space indent).

        Values JSON cannot represent are rendered with ``str()``. Meant for logs
        and debugging; there is no parser back into a
        :class:`Transaction`.
        """

        return self.to_view().model_dump_json(indent=2, fallback=str)


__all__ = [
    "CREDIT",
    "DEBIT",
    "EQUAL",
    "RECORD_KEYS",
    "Transaction",
    "TransactionRecord",
    "TransactionView",
]
