"""SQLAlchemy ORM models for projects, ledger transactions and contracts"""

from sqlalchemy import Column, String, Boolean, Date, DateTime, Numeric, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class ProjectRow(Base):
    """Project record, written back in full on every update"""

    __tablename__ = "project"

    id = Column(String(64), primary_key=True)
    code = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(String(32), nullable=False, default="PROJECT_SCALE")
    status = Column(String(32), nullable=False, default="ACTIVE")
    contract_total_value = Column(Numeric(18, 2), nullable=True)
    manager_id = Column(Text, nullable=True)
    sales_ids = Column(JSON, nullable=False, default=list)
    labor_ids = Column(JSON, nullable=False, default=list)
    operational_notes = Column(JSON, nullable=False, default=list)
    documents = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TransactionRow(Base):
    """Ledger transaction; project_id is empty for non-project cost centers"""

    __tablename__ = "ledger_transaction"

    id = Column(String(64), primary_key=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    type = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, default="DRAFT")
    description = Column(Text, nullable=False, default="")
    project_id = Column(String(64), nullable=True, index=True)
    contract_id = Column(String(64), nullable=True, index=True)
    is_material_cost = Column(Boolean, nullable=False, default=False)
    is_labor_cost = Column(Boolean, nullable=False, default=False)
    attachments = Column(JSON, nullable=False, default=list)


class ContractRow(Base):
    """Revenue or supplier contract"""

    __tablename__ = "contract"

    id = Column(String(64), primary_key=True)
    code = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    type = Column(String(32), nullable=False)
    project_id = Column(String(64), nullable=False, index=True)
    value = Column(Numeric(18, 2), nullable=False, default=0)
    status = Column(String(16), nullable=False, default="DRAFT")
    signed_date = Column(Date, nullable=True)
    file_link = Column(Text, nullable=True)
