"""Data access layer for projects, ledger transactions and contracts"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sitefinance.infrastructure.database.models import ContractRow, ProjectRow, TransactionRow
from sitefinance.domain.models import (
    Attachment,
    Contract,
    ContractStatus,
    ContractType,
    Project,
    ProjectNote,
    ProjectStatus,
    ProjectType,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from sitefinance.domain.exceptions import ContractNotFoundError, ProjectNotFoundError


def _attachment_to_dict(att: Attachment) -> Dict[str, Any]:
    return {"id": att.id, "name": att.name, "url": att.url, "type": att.type, "mime_type": att.mime_type}


def _attachment_from_dict(data: Dict[str, Any]) -> Attachment:
    return Attachment(
        id=data.get("id") or "",
        name=data.get("name", ""),
        url=data.get("url", ""),
        type=data.get("type", "OTHER"),
        mime_type=data.get("mime_type"),
    )


def _note_to_dict(note: ProjectNote) -> Dict[str, Any]:
    return {"id": note.id, "content": note.content, "author": note.author, "date": note.date.isoformat()}


def _note_from_dict(data: Dict[str, Any]) -> ProjectNote:
    return ProjectNote(
        id=data["id"],
        content=data["content"],
        author=data.get("author", ""),
        date=datetime.fromisoformat(data["date"]),
    )


def _project_from_row(row: ProjectRow) -> Project:
    return Project(
        id=row.id,
        code=row.code,
        name=row.name,
        type=ProjectType(row.type),
        status=ProjectStatus(row.status),
        contract_total_value=row.contract_total_value,
        manager_id=row.manager_id,
        sales_ids=tuple(row.sales_ids or ()),
        labor_ids=tuple(row.labor_ids or ()),
        operational_notes=tuple(_note_from_dict(n) for n in row.operational_notes or ()),
        documents=tuple(_attachment_from_dict(d) for d in row.documents or ()),
        created_at=row.created_at,
    )


def _transaction_from_row(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        date=row.date,
        amount=row.amount,
        type=TransactionType(row.type),
        status=TransactionStatus(row.status),
        description=row.description or "",
        project_id=row.project_id,
        is_material_cost=bool(row.is_material_cost),
        is_labor_cost=bool(row.is_labor_cost),
        contract_id=row.contract_id,
        attachments=[_attachment_from_dict(a) for a in row.attachments or ()],
    )


def _contract_from_row(row: ContractRow) -> Contract:
    return Contract(
        id=row.id,
        code=row.code,
        name=row.name,
        type=ContractType(row.type),
        project_id=row.project_id,
        value=row.value if row.value is not None else Decimal("0"),
        status=ContractStatus(row.status),
        signed_date=row.signed_date,
        file_link=row.file_link,
    )


class ProjectRepository:
    """Repository for projects (full-record read-modify-write, last write wins)"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, project_id: str) -> Optional[Project]:
        row = self.db.get(ProjectRow, project_id)
        return _project_from_row(row) if row else None

    def require(self, project_id: str) -> Project:
        """
        Raises:
            ProjectNotFoundError: No project with this id
        """
        project = self.get(project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    def save(self, project: Project) -> Project:
        """Write every field of the snapshot; inserts when the project is new"""
        row = self.db.get(ProjectRow, project.id)
        if row is None:
            row = ProjectRow(id=project.id)
            self.db.add(row)

        row.code = project.code
        row.name = project.name
        row.type = project.type.value
        row.status = project.status.value
        row.contract_total_value = project.contract_total_value
        row.manager_id = project.manager_id
        row.sales_ids = list(project.sales_ids)
        row.labor_ids = list(project.labor_ids)
        row.operational_notes = [_note_to_dict(n) for n in project.operational_notes]
        row.documents = [_attachment_to_dict(d) for d in project.documents]
        if project.created_at is not None:
            row.created_at = project.created_at

        self.db.flush()
        self.db.refresh(row)
        return _project_from_row(row)


class TransactionRepository:
    """Repository for ledger transactions"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, txn: Transaction) -> None:
        self.db.add(
            TransactionRow(
                id=txn.id,
                date=txn.date,
                amount=txn.amount,
                type=txn.type.value,
                status=txn.status.value,
                description=txn.description,
                project_id=txn.project_id,
                contract_id=txn.contract_id,
                is_material_cost=txn.is_material_cost,
                is_labor_cost=txn.is_labor_cost,
                attachments=[_attachment_to_dict(a) for a in txn.attachments],
            )
        )
        self.db.flush()

    def list_by_project(self, project_id: str) -> List[Transaction]:
        """All transactions of a project, any status, newest first"""
        rows = (
            self.db.query(TransactionRow)
            .filter(TransactionRow.project_id == project_id)
            .order_by(TransactionRow.date.desc())
            .all()
        )
        return [_transaction_from_row(r) for r in rows]

    def list_by_contract(self, contract_id: str) -> List[Transaction]:
        rows = self.db.query(TransactionRow).filter(TransactionRow.contract_id == contract_id).all()
        return [_transaction_from_row(r) for r in rows]


class ContractRepository:
    """Repository for contracts"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, contract: Contract) -> None:
        self.db.add(
            ContractRow(
                id=contract.id,
                code=contract.code,
                name=contract.name,
                type=contract.type.value,
                project_id=contract.project_id,
                value=contract.value,
                status=contract.status.value,
                signed_date=contract.signed_date,
                file_link=contract.file_link,
            )
        )
        self.db.flush()

    def get(self, contract_id: str) -> Optional[Contract]:
        row = self.db.get(ContractRow, contract_id)
        return _contract_from_row(row) if row else None

    def require(self, contract_id: str) -> Contract:
        contract = self.get(contract_id)
        if contract is None:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return contract

    def list_by_project(self, project_id: str) -> List[Contract]:
        rows = self.db.query(ContractRow).filter(ContractRow.project_id == project_id).all()
        return [_contract_from_row(r) for r in rows]
