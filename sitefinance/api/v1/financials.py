"""GET /v1/projects/{project_id}/financials, /summary and /v1/contracts/{contract_id}/status"""

import time
import logging
from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sitefinance.api.v1.schemas import (
    ContractStatusResponse,
    CostControlSchema,
    FinancialsResponse,
    SummaryResponse,
)
from sitefinance.api.dependencies import get_cost_bands, get_request_id
from sitefinance.infrastructure.database.session import get_db
from sitefinance.infrastructure.database.repositories import (
    ContractRepository,
    ProjectRepository,
    TransactionRepository,
)
from sitefinance.domain.models import CostBand
from sitefinance.domain.exceptions import ContractNotFoundError
from sitefinance.domain.financials import calculate_contract_status, calculate_project_financials, summarize_project
from sitefinance.domain.cost_control import evaluate_project_costs
from sitefinance.infrastructure.observability.metrics import record_financials
from sitefinance.infrastructure.observability.logging import log_financials_computed

router = APIRouter()


@router.get("/projects/{project_id}/financials", response_model=FinancialsResponse)
def get_project_financials(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    bands: Dict[str, CostBand] = Depends(get_cost_bands),
):
    """
    Realized financial state of a project.

    Flow:
    1. Load project, its transactions and its contracts
    2. Aggregate PAID transactions into income/expense/cost breakdown
    3. Evaluate each cost category against its configured band
    """
    start_time = time.time()
    request_id = get_request_id(request)

    project = ProjectRepository(db).get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    transactions = TransactionRepository(db).list_by_project(project_id)
    contracts = ContractRepository(db).list_by_project(project_id)

    financials = calculate_project_financials(project, transactions, contracts)
    report = evaluate_project_costs(financials, bands)

    duration_ms = (time.time() - start_time) * 1000
    record_financials(report)
    log_financials_computed(
        request_id,
        project_id,
        float(financials.income),
        float(financials.expense),
        float(financials.progress),
        duration_ms,
    )

    return FinancialsResponse(
        project_id=project_id,
        income=float(financials.income),
        expense=float(financials.expense),
        profit=float(financials.profit),
        material_cost=float(financials.material_cost),
        labor_cost=float(financials.labor_cost),
        other_cost=float(financials.other_cost),
        expected_revenue=float(financials.expected_revenue),
        receivable=float(financials.receivable),
        progress=float(financials.progress),
        overpaid=float(financials.overpaid),
        cost_control={
            category: CostControlSchema(
                value=float(result.value),
                percentage=float(result.percentage),
                status=result.status,
                min_good=float(result.band.min_good),
                max_good=float(result.band.max_good),
            )
            for category, result in report.items()
        },
    )


@router.get("/projects/{project_id}/summary", response_model=SummaryResponse)
def get_project_summary(project_id: str, db: Session = Depends(get_db)):
    """Transaction count and last activity date, all statuses included"""
    project = ProjectRepository(db).get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    summary = summarize_project(project, TransactionRepository(db).list_by_project(project_id))

    return SummaryResponse(
        project_id=summary.project_id,
        transaction_count=summary.transaction_count,
        last_transaction_date=summary.last_transaction_date,
    )


@router.get("/contracts/{contract_id}/status", response_model=ContractStatusResponse)
def get_contract_status(contract_id: str, db: Session = Depends(get_db)):
    """Cash collected or paid against a contract"""
    try:
        contract = ContractRepository(db).require(contract_id)
    except ContractNotFoundError as e:
        logging.warning(f"Contract lookup failed: {e}")
        raise HTTPException(status_code=404, detail="Contract not found")

    status = calculate_contract_status(contract, TransactionRepository(db).list_by_contract(contract_id))

    return ContractStatusResponse(
        contract_id=status.contract_id,
        is_revenue=status.is_revenue,
        total_paid=float(status.total_paid),
        paid_percent=float(status.paid_percent),
        remaining=float(status.remaining),
        is_over_budget=status.is_over_budget,
        related_transaction_ids=status.related_transaction_ids,
    )
