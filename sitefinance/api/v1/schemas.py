"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Dict, List, Optional
from sitefinance.domain.models import CostStatus, DocumentOrigin, ProjectStatus


class CostControlSchema(BaseModel):
    """Share of expected revenue consumed by one cost category"""

    value: float
    percentage: float
    status: CostStatus
    min_good: float
    max_good: float


class FinancialsResponse(BaseModel):
    """Response for GET /v1/projects/{project_id}/financials"""

    project_id: str
    income: float
    expense: float
    profit: float
    material_cost: float
    labor_cost: float
    other_cost: float
    expected_revenue: float
    receivable: float
    progress: float
    overpaid: float
    cost_control: Dict[str, CostControlSchema]


class DocumentSchema(BaseModel):
    """Single entry of the project document feed"""

    id: str
    name: str
    origin: DocumentOrigin
    date: Optional[datetime] = None
    source_id: str
    source_label: str
    url: str
    is_link: bool


class DocumentsResponse(BaseModel):
    """Response for GET /v1/projects/{project_id}/documents"""

    project_id: str
    documents: List[DocumentSchema]
    boq_available: bool


class SummaryResponse(BaseModel):
    """Response for GET /v1/projects/{project_id}/summary"""

    project_id: str
    transaction_count: int
    last_transaction_date: Optional[date] = None


class ContractStatusResponse(BaseModel):
    """Response for GET /v1/contracts/{contract_id}/status"""

    contract_id: str
    is_revenue: bool
    total_paid: float
    paid_percent: float
    remaining: float
    is_over_budget: bool
    related_transaction_ids: List[str]


class StatusUpdateRequest(BaseModel):
    """Request body for PUT /v1/projects/{project_id}/status"""

    status: ProjectStatus


class NoteRequest(BaseModel):
    """Request body for POST /v1/projects/{project_id}/notes"""

    content: str = Field(..., min_length=1, description="Note text")
    author: str = Field(..., min_length=1, description="Display name of the writer")


class LinkRequest(BaseModel):
    """Request body for POST /v1/projects/{project_id}/documents/links"""

    name: str = Field(..., min_length=1, description="Display name of the link")
    url: str = Field(..., min_length=1, description="External address (Drive, shared sheet)")


class ContractValueRequest(BaseModel):
    """Request body for PUT /v1/projects/{project_id}/contract-value"""

    contract_total_value: Optional[float] = Field(None, ge=0, description="Expected revenue; null clears it")


class ProjectDocumentSchema(BaseModel):
    id: str
    name: str
    url: str
    type: str
    mime_type: Optional[str] = None


class NoteSchema(BaseModel):
    id: str
    content: str
    author: str
    date: datetime


class ProjectResponse(BaseModel):
    """Project snapshot returned after a write"""

    id: str
    code: str
    name: str
    status: ProjectStatus
    contract_total_value: Optional[float] = None
    operational_notes: List[NoteSchema]
    documents: List[ProjectDocumentSchema] = []
