"""Unit tests for project lifecycle transitions and snapshot writes"""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
import itertools
import pytest
from sitefinance.domain.models import Attachment, ProjectStatus
from sitefinance.domain.documents import aggregate_documents
from sitefinance.domain.lifecycle import (
    add_operational_note,
    add_project_link,
    is_transition_allowed,
    set_contract_value,
    transition_status,
)
from sitefinance.domain.exceptions import InvalidDocumentLinkError, InvalidNoteError, InvalidTransitionError


def test_every_transition_is_allowed():
    """Test the lifecycle is flat: any status to any status"""
    for current, target in itertools.product(ProjectStatus, repeat=2):
        assert is_transition_allowed(current, target) is True


def test_new_project_starts_active(project):
    assert project.status == ProjectStatus.ACTIVE


def test_transition_returns_new_snapshot(project):
    """Test the original snapshot is left untouched"""
    cancelled = transition_status(project, ProjectStatus.CANCELLED)

    assert cancelled.status == ProjectStatus.CANCELLED
    assert project.status == ProjectStatus.ACTIVE


def test_cancelled_project_can_be_reopened(project):
    cancelled = transition_status(project, ProjectStatus.CANCELLED)
    reopened = transition_status(cancelled, ProjectStatus.ACTIVE)

    assert reopened.status == ProjectStatus.ACTIVE


def test_transition_with_stricter_policy(project):
    """Test a custom policy can reject a transition"""
    completed = transition_status(project, ProjectStatus.COMPLETED)

    def no_reopen(current, target):
        return current != ProjectStatus.COMPLETED

    with pytest.raises(InvalidTransitionError):
        transition_status(completed, ProjectStatus.ACTIVE, policy=no_reopen)


def test_add_operational_note_newest_first(project):
    first = add_operational_note(project, "Foundation poured", "Lan", now=datetime(2024, 3, 1, tzinfo=timezone.utc))
    second = add_operational_note(first, "  Steel delivered  ", "Minh", now=datetime(2024, 3, 2, tzinfo=timezone.utc))

    assert [n.content for n in second.operational_notes] == ["Steel delivered", "Foundation poured"]
    assert second.operational_notes[0].author == "Minh"
    assert project.operational_notes == ()


def test_add_operational_note_rejects_blank(project):
    with pytest.raises(InvalidNoteError):
        add_operational_note(project, "   ", "Lan")


def test_set_contract_value(project):
    updated = set_contract_value(project, Decimal("2500000"))
    cleared = set_contract_value(updated, None)

    assert updated.contract_total_value == Decimal("2500000")
    assert cleared.contract_total_value is None


def test_add_project_link_newest_first(project):
    stored = replace(project, documents=(Attachment(id="doc_1", name="permit.pdf", url="https://files/p", type="PDF"),))

    updated = add_project_link(stored, "  Site photos  ", " https://drive/photos ")

    link = updated.documents[0]
    assert link.id.startswith("link_")
    assert (link.name, link.url) == ("Site photos", "https://drive/photos")
    assert (link.type, link.mime_type) == ("OTHER", "application/link")
    assert updated.documents[1].id == "doc_1"
    assert stored.documents[0].id == "doc_1"


def test_add_project_link_shows_as_link_in_feed(project):
    updated = add_project_link(project, "Shared sheet", "https://sheets/boq")

    [record] = aggregate_documents(updated, [], [], [])

    assert record.is_link is True
    assert record.date == project.created_at
    assert record.id == f"PROJECT_FILE:{project.id}:{updated.documents[0].id}"


@pytest.mark.parametrize("name,url", [("   ", "https://drive/x"), ("Photos", ""), ("", "  ")])
def test_add_project_link_rejects_blank(project, name, url):
    with pytest.raises(InvalidDocumentLinkError):
        add_project_link(project, name, url)
