"""Project writes - status transitions, operational notes, saved links and contract value"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sitefinance.api.v1.schemas import (
    ContractValueRequest,
    LinkRequest,
    NoteRequest,
    NoteSchema,
    ProjectDocumentSchema,
    ProjectResponse,
    StatusUpdateRequest,
)
from sitefinance.api.dependencies import get_request_id
from sitefinance.infrastructure.database.session import get_db
from sitefinance.infrastructure.database.repositories import ProjectRepository
from sitefinance.domain.models import Project
from sitefinance.domain.lifecycle import (
    add_operational_note,
    add_project_link,
    set_contract_value,
    transition_status,
)
from sitefinance.domain.exceptions import (
    InvalidDocumentLinkError,
    InvalidNoteError,
    InvalidTransitionError,
    ProjectNotFoundError,
)
from sitefinance.infrastructure.observability.metrics import status_transition_counter
from sitefinance.infrastructure.observability.logging import log_status_changed

router = APIRouter()


def _to_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        code=project.code,
        name=project.name,
        status=project.status,
        contract_total_value=float(project.contract_total_value)
        if project.contract_total_value is not None
        else None,
        operational_notes=[
            NoteSchema(id=n.id, content=n.content, author=n.author, date=n.date)
            for n in project.operational_notes
        ],
        documents=[
            ProjectDocumentSchema(id=d.id, name=d.name, url=d.url, type=d.type, mime_type=d.mime_type)
            for d in project.documents
        ],
    )


@router.put("/projects/{project_id}/status", response_model=ProjectResponse)
def update_project_status(
    project_id: str,
    body: StatusUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Move a project to another lifecycle status.

    Read-modify-write of the full record; concurrent writers are not
    detected (last write wins).
    """
    request_id = get_request_id(request)
    repo = ProjectRepository(db)

    try:
        project = repo.require(project_id)
        updated = repo.save(transition_status(project, body.status))
        db.commit()

        status_transition_counter.labels(status=updated.status.value).inc()
        log_status_changed(request_id, project_id, project.status.value, updated.status.value)
        return _to_response(updated)

    except ProjectNotFoundError as e:
        db.rollback()
        logging.warning(f"Project not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Project not found")

    except InvalidTransitionError as e:
        db.rollback()
        logging.warning(f"Rejected transition: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/projects/{project_id}/notes", response_model=ProjectResponse)
def add_project_note(
    project_id: str,
    body: NoteRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Prepend an operational note (newest first)"""
    request_id = get_request_id(request)
    repo = ProjectRepository(db)

    try:
        project = repo.require(project_id)
        updated = repo.save(add_operational_note(project, body.content, body.author))
        db.commit()
        return _to_response(updated)

    except ProjectNotFoundError as e:
        db.rollback()
        logging.warning(f"Project not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Project not found")

    except InvalidNoteError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/projects/{project_id}/documents/links", response_model=ProjectResponse)
def add_document_link(
    project_id: str,
    body: LinkRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Save an external link among the project files (newest first)"""
    request_id = get_request_id(request)
    repo = ProjectRepository(db)

    try:
        project = repo.require(project_id)
        updated = repo.save(add_project_link(project, body.name, body.url))
        db.commit()
        return _to_response(updated)

    except ProjectNotFoundError as e:
        db.rollback()
        logging.warning(f"Project not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Project not found")

    except InvalidDocumentLinkError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/projects/{project_id}/contract-value", response_model=ProjectResponse)
def update_contract_value(
    project_id: str,
    body: ContractValueRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Set or clear the authoritative expected revenue of a project"""
    request_id = get_request_id(request)
    repo = ProjectRepository(db)

    value = Decimal(str(body.contract_total_value)) if body.contract_total_value is not None else None

    try:
        project = repo.require(project_id)
        updated = repo.save(set_contract_value(project, value))
        db.commit()
        return _to_response(updated)

    except ProjectNotFoundError as e:
        db.rollback()
        logging.warning(f"Project not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Project not found")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
