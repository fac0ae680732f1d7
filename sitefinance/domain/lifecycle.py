"""Project lifecycle - status transitions and snapshot-replacing writes"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional
from sitefinance.domain.models import Attachment, Project, ProjectNote, ProjectStatus
from sitefinance.domain.documents import LINK_DOCUMENT_TYPE, LINK_MIME_TYPE
from sitefinance.domain.exceptions import InvalidDocumentLinkError, InvalidNoteError, InvalidTransitionError
from sitefinance.domain.ledger import to_amount

TransitionPolicy = Callable[[ProjectStatus, ProjectStatus], bool]


def is_transition_allowed(current: ProjectStatus, target: ProjectStatus) -> bool:
    """
    Lifecycle is flat: every status can jump to every other, including
    reopening COMPLETED or CANCELLED projects.
    """
    return True


def transition_status(
    project: Project,
    new_status: ProjectStatus,
    policy: TransitionPolicy = is_transition_allowed,
) -> Project:
    """Return a new snapshot of the project in new_status"""
    if not policy(project.status, new_status):
        raise InvalidTransitionError(
            f"Project {project.id} cannot move from {project.status.value} to {new_status.value}"
        )
    return replace(project, status=new_status)


def add_operational_note(
    project: Project,
    content: str,
    author: str,
    now: Optional[datetime] = None,
) -> Project:
    """Prepend a note to the project's operational log (newest first)"""
    content = (content or "").strip()
    if not content:
        raise InvalidNoteError("Note content is empty")

    note = ProjectNote(
        id=f"note_{uuid.uuid4().hex[:12]}",
        content=content,
        author=author,
        date=now or datetime.now(timezone.utc),
    )
    return replace(project, operational_notes=(note,) + tuple(project.operational_notes))


def add_project_link(project: Project, name: str, url: str) -> Project:
    """Prepend an external link (Drive folder, shared sheet) to the project documents"""
    name = (name or "").strip()
    url = (url or "").strip()
    if not name or not url:
        raise InvalidDocumentLinkError("Link needs both a name and a url")

    link = Attachment(
        id=f"link_{uuid.uuid4().hex[:12]}",
        name=name,
        url=url,
        type=LINK_DOCUMENT_TYPE,
        mime_type=LINK_MIME_TYPE,
    )
    return replace(project, documents=(link,) + tuple(project.documents))


def set_contract_value(project: Project, value: Optional[Decimal]) -> Project:
    """Set the authoritative expected revenue; None or 0 falls back to revenue contracts"""
    return replace(project, contract_total_value=to_amount(value) if value is not None else None)
