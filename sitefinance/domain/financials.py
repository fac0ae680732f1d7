"""Project financial aggregation - core business logic for the 360 view"""

from decimal import Decimal
from typing import Iterable, List
from sitefinance.domain.models import (
    Contract,
    ContractPaymentStatus,
    ContractType,
    Project,
    ProjectFinancials,
    ProjectSummary,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from sitefinance.domain.ledger import ZERO, filter_by_project, paid_project_transactions, sum_amounts, to_amount

HUNDRED = Decimal("100")


def resolve_expected_revenue(project: Project, contracts: Iterable[Contract] = ()) -> Decimal:
    """
    Expected revenue of a project.

    Resolution order:
    - project.contract_total_value when set and non-zero
    - sum of REVENUE contract values linked to the project
    - 0
    """
    contract_total = to_amount(project.contract_total_value)
    if contract_total > 0:
        return contract_total

    return sum(
        (
            to_amount(c.value)
            for c in contracts
            if c.project_id == project.id and c.type == ContractType.REVENUE
        ),
        ZERO,
    )


def calculate_project_financials(
    project: Project,
    transactions: Iterable[Transaction],
    contracts: Iterable[Contract] = (),
) -> ProjectFinancials:
    """
    Reduce the ledger to the realized financial state of a project.

    Only PAID transactions of the project count. Cost breakdown:
    - material: PAID expenses flagged is_material_cost
    - labor: PAID expenses flagged is_labor_cost
    - other: expense - material - labor (never re-summed from unflagged rows)

    Receivable is clamped at 0; money collected beyond expected revenue is
    reported separately as overpaid.
    """
    paid = paid_project_transactions(transactions, project.id)
    expenses = [t for t in paid if t.type == TransactionType.EXPENSE]

    income = sum_amounts(paid, TransactionType.INCOME)
    expense = sum_amounts(expenses, TransactionType.EXPENSE)

    material_cost = sum((to_amount(t.amount) for t in expenses if t.is_material_cost), ZERO)
    labor_cost = sum((to_amount(t.amount) for t in expenses if t.is_labor_cost), ZERO)
    other_cost = expense - material_cost - labor_cost

    expected_revenue = resolve_expected_revenue(project, contracts)
    receivable = max(ZERO, expected_revenue - income)

    # Avoid division by zero: no expected revenue means no measurable progress
    if expected_revenue > 0:
        progress = income / expected_revenue * HUNDRED
        overpaid = max(ZERO, income - expected_revenue)
    else:
        progress = ZERO
        overpaid = ZERO

    return ProjectFinancials(
        income=income,
        expense=expense,
        profit=income - expense,
        material_cost=material_cost,
        labor_cost=labor_cost,
        other_cost=other_cost,
        expected_revenue=expected_revenue,
        receivable=receivable,
        progress=progress,
        overpaid=overpaid,
    )


def calculate_contract_status(contract: Contract, transactions: Iterable[Transaction]) -> ContractPaymentStatus:
    """
    Cash flow against a single contract.

    Revenue contracts track INCOME (collected from the client), every other
    contract type tracks EXPENSE (paid to the supplier). Only PAID rows count
    toward total_paid; remaining may go negative when a contract is overpaid.
    """
    is_revenue = contract.type == ContractType.REVENUE
    target_type = TransactionType.INCOME if is_revenue else TransactionType.EXPENSE

    related = [t for t in transactions if t.contract_id == contract.id and t.type == target_type]
    total_paid = sum(
        (to_amount(t.amount) for t in related if t.status == TransactionStatus.PAID),
        ZERO,
    )

    value = to_amount(contract.value)
    paid_percent = total_paid / value * HUNDRED if value > 0 else ZERO

    return ContractPaymentStatus(
        contract_id=contract.id,
        is_revenue=is_revenue,
        total_paid=total_paid,
        paid_percent=paid_percent,
        remaining=value - total_paid,
        is_over_budget=not is_revenue and total_paid > value,
        related_transaction_ids=[t.id for t in related],
    )


def summarize_project(project: Project, transactions: Iterable[Transaction]) -> ProjectSummary:
    """Ledger activity of a project across all statuses"""
    project_txns: List[Transaction] = filter_by_project(transactions, project.id)
    dates = [t.date for t in project_txns if t.date is not None]

    return ProjectSummary(
        project_id=project.id,
        transaction_count=len(project_txns),
        last_transaction_date=max(dates) if dates else None,
    )
