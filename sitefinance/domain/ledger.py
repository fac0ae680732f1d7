"""Ledger filtering - selects the transactions that count for a project"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List
from sitefinance.domain.models import Transaction, TransactionStatus, TransactionType

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a raw number to a finite Decimal; sign is kept, garbage becomes 0"""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return ZERO

    return number if number.is_finite() else ZERO


def to_amount(value: Any) -> Decimal:
    """
    Coerce a raw amount to a non-negative finite Decimal.

    None, non-numeric, NaN, infinite and negative values all become 0 so that
    sums over the ledger never fail and never go below zero.
    """
    amount = to_decimal(value)
    return amount if amount > 0 else ZERO


def filter_by_project(transactions: Iterable[Transaction], project_id: str) -> List[Transaction]:
    """Transactions linked to the project, in ledger order"""
    return [t for t in transactions if t.project_id == project_id]


def filter_by_status(
    transactions: Iterable[Transaction],
    status: TransactionStatus = TransactionStatus.PAID,
) -> List[Transaction]:
    """Transactions in the given status (PAID by default)"""
    return [t for t in transactions if t.status == status]


def paid_project_transactions(transactions: Iterable[Transaction], project_id: str) -> List[Transaction]:
    """Realized money of a project: its PAID transactions only"""
    return filter_by_status(filter_by_project(transactions, project_id))


def sum_amounts(transactions: Iterable[Transaction], type: TransactionType) -> Decimal:
    return sum((to_amount(t.amount) for t in transactions if t.type == type), ZERO)
