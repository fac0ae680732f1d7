"""Document aggregation - merges every file linked to a project into one feed"""

from typing import Iterable, List
from sitefinance.domain.models import BOQ, Contract, DocumentOrigin, DocumentRecord, Project, Transaction
from sitefinance.domain.ledger import filter_by_project
from sitefinance.utils.date_utils import sort_key_desc, to_naive_utc

LINK_DOCUMENT_TYPE = "OTHER"
LINK_MIME_TYPE = "application/link"


def _transaction_documents(transactions: Iterable[Transaction]) -> List[DocumentRecord]:
    return [
        DocumentRecord(
            id=f"{DocumentOrigin.TRANSACTION.value}:{t.id}:{att.id}",
            name=att.name,
            origin=DocumentOrigin.TRANSACTION,
            date=to_naive_utc(t.date),
            source_id=t.id,
            source_label=t.description,
            url=att.url,
        )
        for t in transactions
        for att in t.attachments or []
    ]


def _contract_documents(contracts: Iterable[Contract]) -> List[DocumentRecord]:
    # Contract files are external links (Drive, e-sign portals), not blobs
    return [
        DocumentRecord(
            id=f"{DocumentOrigin.CONTRACT.value}:{c.id}",
            name=f"Contract: {c.name}",
            origin=DocumentOrigin.CONTRACT,
            date=to_naive_utc(c.signed_date),
            source_id=c.id,
            source_label=c.code,
            url=c.file_link,
            is_link=True,
        )
        for c in contracts
        if c.file_link
    ]


def _boq_documents(boqs: Iterable[BOQ]) -> List[DocumentRecord]:
    return [
        DocumentRecord(
            id=f"{DocumentOrigin.BOQ.value}:{b.id}",
            name=f"BOQ: {b.name}",
            origin=DocumentOrigin.BOQ,
            date=to_naive_utc(b.created_at),
            source_id=b.id,
            source_label="Procurement",
            url=b.file_url,
        )
        for b in boqs
    ]


def _project_documents(project: Project) -> List[DocumentRecord]:
    # Stored documents carry no upload timestamp: they are stamped with the
    # project's creation date.
    project_date = to_naive_utc(project.created_at)
    return [
        DocumentRecord(
            id=f"{DocumentOrigin.PROJECT_FILE.value}:{project.id}:{doc.id or idx}",
            name=doc.name,
            origin=DocumentOrigin.PROJECT_FILE,
            date=project_date,
            source_id=project.id,
            source_label="Project files",
            url=doc.url,
            is_link=doc.type == LINK_DOCUMENT_TYPE and doc.mime_type == LINK_MIME_TYPE,
        )
        for idx, doc in enumerate(project.documents)
    ]


def aggregate_documents(
    project: Project,
    transactions: Iterable[Transaction],
    contracts: Iterable[Contract],
    boqs: Iterable[BOQ],
) -> List[DocumentRecord]:
    """
    Build the project document feed from four independent sources.

    Sources:
    - attachments of the project's transactions (any status)
    - contracts of the project that have a file link
    - BOQs already fetched for the project by the procurement service
    - documents stored directly on the project

    Record ids are prefixed with their origin so raw ids shared between
    sources never collide. The feed is sorted newest first; ties keep
    insertion order and records without a date go last.
    """
    project_contracts = [c for c in contracts if c.project_id == project.id]

    docs: List[DocumentRecord] = []
    docs.extend(_transaction_documents(filter_by_project(transactions, project.id)))
    docs.extend(_contract_documents(project_contracts))
    docs.extend(_boq_documents(boqs))
    docs.extend(_project_documents(project))

    return sorted(docs, key=lambda d: sort_key_desc(d.date), reverse=True)
