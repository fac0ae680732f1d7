"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date, datetime
from decimal import Decimal
from typing import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sitefinance.api.main import create_app
from sitefinance.infrastructure.database.models import Base
from sitefinance.infrastructure.database.session import get_db
from sitefinance.domain.models import (
    Attachment,
    Contract,
    ContractType,
    Project,
    Transaction,
    TransactionStatus,
    TransactionType,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session) -> FastAPI:
    """FastAPI application bound to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def project() -> Project:
    """Project with a signed contract value of 1,000,000"""
    return Project(
        id="prj_1",
        code="DA-001",
        name="Villa Thao Dien",
        contract_total_value=Decimal("1000000"),
        created_at=datetime(2024, 1, 10, 8, 0),
    )


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Ledger of prj_1 mixed with another project and unpaid rows"""
    return [
        Transaction(
            id="t_income_1",
            date=date(2024, 2, 1),
            amount=Decimal("400000"),
            type=TransactionType.INCOME,
            status=TransactionStatus.PAID,
            description="Advance payment",
            project_id="prj_1",
            attachments=[Attachment(id="a1", name="receipt.pdf", url="https://files/a1", type="PDF")],
        ),
        Transaction(
            id="t_material_1",
            date=date(2024, 2, 5),
            amount=Decimal("150000"),
            type=TransactionType.EXPENSE,
            status=TransactionStatus.PAID,
            description="Cement",
            project_id="prj_1",
            is_material_cost=True,
            attachments=[
                Attachment(id="a2", name="invoice.pdf", url="https://files/a2", type="PDF"),
                Attachment(id="a3", name="delivery.jpg", url="https://files/a3", type="IMAGE"),
            ],
        ),
        Transaction(
            id="t_labor_1",
            date=date(2024, 2, 10),
            amount=Decimal("50000"),
            type=TransactionType.EXPENSE,
            status=TransactionStatus.PAID,
            description="Crew wages",
            project_id="prj_1",
            is_labor_cost=True,
        ),
        Transaction(
            id="t_other_1",
            date=date(2024, 2, 12),
            amount=Decimal("20000"),
            type=TransactionType.EXPENSE,
            status=TransactionStatus.PAID,
            description="Commission",
            project_id="prj_1",
        ),
        Transaction(
            id="t_draft_1",
            date=date(2024, 2, 15),
            amount=Decimal("999999"),
            type=TransactionType.EXPENSE,
            status=TransactionStatus.SUBMITTED,
            description="Pending steel order",
            project_id="prj_1",
            is_material_cost=True,
        ),
        Transaction(
            id="t_other_project",
            date=date(2024, 2, 3),
            amount=Decimal("700000"),
            type=TransactionType.INCOME,
            status=TransactionStatus.PAID,
            description="Other site",
            project_id="prj_2",
        ),
    ]


@pytest.fixture
def revenue_contract() -> Contract:
    return Contract(
        id="c_rev",
        code="HD-01",
        name="Main construction",
        type=ContractType.REVENUE,
        project_id="prj_1",
        value=Decimal("500000"),
        signed_date=date(2024, 1, 15),
        file_link="https://drive/hd-01",
    )
