"""Unit tests for project document aggregation"""

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from sitefinance.domain.models import (
    Attachment,
    BOQ,
    ContractType,
    DocumentOrigin,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from sitefinance.domain.documents import aggregate_documents


def _boqs() -> list[BOQ]:
    return [
        BOQ(id="b1", name="Phase 1", created_at=datetime(2024, 3, 1, 9, 30), file_url="https://proc/b1"),
        BOQ(id="b2", name="Phase 2", created_at=datetime(2024, 1, 20, tzinfo=timezone.utc), file_url="https://proc/b2"),
    ]


def test_aggregate_documents_count(project, sample_transactions, revenue_contract):
    """Test one record per attachment, linked contract, BOQ and project document"""
    no_link = replace(revenue_contract, id="c_nolink", file_link=None)
    empty_link = replace(revenue_contract, id="c_empty", file_link="")
    project = replace(
        project,
        documents=(
            Attachment(id="d1", name="Permit.pdf", url="https://files/d1", type="PDF"),
            Attachment(id="", name="Site survey", url="https://maps/survey", type="OTHER", mime_type="application/link"),
        ),
    )

    docs = aggregate_documents(project, sample_transactions, [revenue_contract, no_link, empty_link], _boqs())

    # 3 transaction attachments + 1 linked contract + 2 BOQs + 2 project docs
    assert len(docs) == 8


def test_aggregate_documents_sorted_newest_first(project, sample_transactions, revenue_contract):
    docs = aggregate_documents(project, sample_transactions, [revenue_contract], _boqs())

    dates = [d.date for d in docs]
    assert dates == sorted(dates, reverse=True)
    assert docs[0].origin == DocumentOrigin.BOQ


def test_aggregate_documents_transaction_records(project, sample_transactions):
    """Test transaction attachments carry the transaction date and description"""
    docs = aggregate_documents(project, sample_transactions, [], [])

    by_id = {d.id: d for d in docs}
    record = by_id["TRANSACTION:t_material_1:a3"]
    assert record.name == "delivery.jpg"
    assert record.date == datetime(2024, 2, 5)
    assert record.source_id == "t_material_1"
    assert record.source_label == "Cement"
    assert record.is_link is False


def test_aggregate_documents_excludes_other_projects(project, sample_transactions, revenue_contract):
    """Test transactions and contracts of other projects are ignored"""
    foreign_txn = replace(
        sample_transactions[0],
        id="t_foreign",
        project_id="prj_2",
        attachments=[Attachment(id="x", name="x.pdf", url="u")],
    )
    foreign_contract = replace(revenue_contract, id="c_foreign", project_id="prj_2")

    docs = aggregate_documents(project, [foreign_txn], [foreign_contract], [])

    assert docs == []


def test_aggregate_documents_contract_is_link(project, revenue_contract):
    docs = aggregate_documents(project, [], [revenue_contract], [])

    assert len(docs) == 1
    assert docs[0].id == "CONTRACT:c_rev"
    assert docs[0].name == "Contract: Main construction"
    assert docs[0].source_label == "HD-01"
    assert docs[0].date == datetime(2024, 1, 15)
    assert docs[0].is_link is True


def test_aggregate_documents_project_files_use_project_creation_date(project):
    """Test project documents are stamped with the project's creation date"""
    project = replace(
        project,
        documents=(
            Attachment(id="d1", name="Permit.pdf", url="https://files/d1", type="PDF"),
            Attachment(id="", name="Site survey", url="https://maps/survey", type="OTHER", mime_type="application/link"),
            Attachment(id="d3", name="Notes", url="https://files/d3", type="PDF", mime_type="application/link"),
        ),
    )

    docs = aggregate_documents(project, [], [], [])

    assert all(d.date == project.created_at for d in docs)
    assert [d.id for d in docs] == ["PROJECT_FILE:prj_1:d1", "PROJECT_FILE:prj_1:1", "PROJECT_FILE:prj_1:d3"]
    assert [d.is_link for d in docs] == [False, True, False]


def test_aggregate_documents_ids_do_not_collide(project, revenue_contract):
    """Test the same raw id in two sources yields two distinct records"""
    boq = BOQ(id="c_rev", name="Same id", created_at=datetime(2024, 1, 15), file_url="u")

    docs = aggregate_documents(project, [], [revenue_contract], [boq])

    assert len({d.id for d in docs}) == 2


def test_aggregate_documents_missing_dates_sort_last(project, revenue_contract):
    unsigned = replace(revenue_contract, id="c_unsigned", signed_date=None, type=ContractType.LABOR, value=Decimal("1"))

    docs = aggregate_documents(project, [], [unsigned, revenue_contract], [])

    assert [d.id for d in docs] == ["CONTRACT:c_rev", "CONTRACT:c_unsigned"]


def test_aggregate_documents_equal_dates_keep_source_order(project):
    """Test ties keep insertion order: transactions before BOQs"""
    txn = Transaction(
        id="t1",
        date=date(2024, 5, 1),
        amount=Decimal("1"),
        type=TransactionType.EXPENSE,
        status=TransactionStatus.DRAFT,
        description="Sand",
        project_id="prj_1",
        attachments=[Attachment(id="a", name="a.pdf", url="u")],
    )
    boq = BOQ(id="b", name="Same day", created_at=datetime(2024, 5, 1), file_url="u")

    docs = aggregate_documents(project, [txn], [], [boq])

    assert [d.origin for d in docs] == [DocumentOrigin.TRANSACTION, DocumentOrigin.BOQ]
