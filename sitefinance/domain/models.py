"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple


class ProjectType(str, Enum):
    RETAIL = "RETAIL"
    PROJECT_SCALE = "PROJECT_SCALE"


class ProjectStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    PAID = "PAID"
    REJECTED = "REJECTED"


class ContractType(str, Enum):
    REVENUE = "REVENUE"
    SUPPLIER_MATERIAL = "SUPPLIER_MATERIAL"
    LABOR = "LABOR"
    SUB_CONTRACT = "SUB_CONTRACT"


class ContractStatus(str, Enum):
    DRAFT = "DRAFT"
    SIGNED = "SIGNED"
    COMPLETED = "COMPLETED"


class DocumentOrigin(str, Enum):
    TRANSACTION = "TRANSACTION"
    CONTRACT = "CONTRACT"
    BOQ = "BOQ"
    PROJECT_FILE = "PROJECT_FILE"


class CostStatus(str, Enum):
    NO_DATA = "NO_DATA"
    GOOD = "GOOD"
    OVER = "OVER"
    UNDER = "UNDER"


@dataclass(frozen=True)
class Attachment:
    """File attached to a transaction or stored on a project"""

    id: str
    name: str
    url: str
    type: str = "OTHER"  # IMAGE | PDF | EXCEL | OTHER
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class ProjectNote:
    """Operational note written by a project member"""

    id: str
    content: str
    author: str
    date: datetime


@dataclass(frozen=True)
class Project:
    """
    Project snapshot - the aggregate root.

    Frozen: writes produce a new snapshot (dataclasses.replace) which the
    caller persists and then uses in place of the old one.
    """

    id: str
    code: str
    name: str
    type: ProjectType = ProjectType.PROJECT_SCALE
    status: ProjectStatus = ProjectStatus.ACTIVE
    contract_total_value: Optional[Decimal] = None
    manager_id: Optional[str] = None
    sales_ids: Tuple[str, ...] = ()
    labor_ids: Tuple[str, ...] = ()
    operational_notes: Tuple[ProjectNote, ...] = ()  # newest first
    documents: Tuple[Attachment, ...] = ()
    created_at: Optional[datetime] = None


@dataclass
class Transaction:
    """Cash movement recorded against a project or a cost center"""

    id: str
    date: date
    amount: Decimal
    type: TransactionType
    status: TransactionStatus
    description: str = ""
    project_id: Optional[str] = None
    is_material_cost: bool = False
    is_labor_cost: bool = False
    contract_id: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class Contract:
    """Revenue or supplier contract linked to a project"""

    id: str
    code: str
    name: str
    type: ContractType
    project_id: str
    value: Decimal
    status: ContractStatus = ContractStatus.DRAFT
    signed_date: Optional[date] = None
    file_link: Optional[str] = None


@dataclass
class BOQ:
    """Bill of Quantities file from the procurement service"""

    id: str
    name: str
    created_at: Optional[datetime]
    file_url: str = ""


@dataclass
class DocumentRecord:
    """Normalized entry of the project document feed"""

    id: str
    name: str
    origin: DocumentOrigin
    date: Optional[datetime]
    source_id: str
    source_label: str
    url: str
    is_link: bool = False


@dataclass(frozen=True)
class ProjectFinancials:
    """Realized financial state of a project, derived from PAID transactions"""

    income: Decimal
    expense: Decimal
    profit: Decimal
    material_cost: Decimal
    labor_cost: Decimal
    other_cost: Decimal
    expected_revenue: Decimal
    receivable: Decimal
    progress: Decimal
    overpaid: Decimal


@dataclass(frozen=True)
class CostBand:
    """Healthy percentage-of-revenue range for a cost category"""

    min_good: Decimal
    max_good: Decimal


@dataclass(frozen=True)
class CostControlResult:
    """Share of expected revenue consumed by one cost category"""

    value: Decimal
    percentage: Decimal
    status: CostStatus
    band: CostBand


@dataclass
class ContractPaymentStatus:
    """Cash collected (revenue) or paid out (supplier) against a contract"""

    contract_id: str
    is_revenue: bool
    total_paid: Decimal
    paid_percent: Decimal
    remaining: Decimal
    is_over_budget: bool
    related_transaction_ids: List[str]


@dataclass
class ProjectSummary:
    """Ledger activity overview of a project"""

    project_id: str
    transaction_count: int
    last_transaction_date: Optional[date]
