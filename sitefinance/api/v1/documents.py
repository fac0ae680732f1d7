"""GET /v1/projects/{project_id}/documents - Aggregated project document feed"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sitefinance.api.v1.schemas import DocumentSchema, DocumentsResponse
from sitefinance.api.dependencies import get_procurement_client, get_request_id
from sitefinance.infrastructure.database.session import get_db
from sitefinance.infrastructure.database.repositories import (
    ContractRepository,
    ProjectRepository,
    TransactionRepository,
)
from sitefinance.infrastructure.clients.procurement import ProcurementClient
from sitefinance.domain.documents import aggregate_documents
from sitefinance.domain.exceptions import ProcurementAPIError
from sitefinance.infrastructure.observability.metrics import (
    document_feed_size_histogram,
    procurement_fetch_failures_counter,
)
from sitefinance.infrastructure.observability.logging import log_documents_aggregated

router = APIRouter()


@router.get("/projects/{project_id}/documents", response_model=DocumentsResponse)
async def get_project_documents(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    procurement_client: ProcurementClient = Depends(get_procurement_client),
):
    """
    Merge transaction attachments, contract files, BOQs and project files.

    The feed is rebuilt from scratch on every call. A procurement outage
    degrades the feed (no BOQ records) instead of failing the request.
    """
    request_id = get_request_id(request)

    project = ProjectRepository(db).get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    transactions = TransactionRepository(db).list_by_project(project_id)
    contracts = ContractRepository(db).list_by_project(project_id)

    boq_available = True
    try:
        boqs = await procurement_client.list_boqs(project_id)
    except ProcurementAPIError as e:
        procurement_fetch_failures_counter.inc()
        logging.warning(f"Procurement API error: {e}", extra={"request_id": request_id})
        boqs = []
        boq_available = False

    documents = aggregate_documents(project, transactions, contracts, boqs)

    document_feed_size_histogram.observe(len(documents))
    log_documents_aggregated(request_id, project_id, len(documents), boq_available)

    return DocumentsResponse(
        project_id=project_id,
        documents=[
            DocumentSchema(
                id=d.id,
                name=d.name,
                origin=d.origin,
                date=d.date,
                source_id=d.source_id,
                source_label=d.source_label,
                url=d.url,
                is_link=d.is_link,
            )
            for d in documents
        ],
        boq_available=boq_available,
    )
