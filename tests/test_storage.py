# tests/test_storage.py
from datetime import timedelta

import pytest

from helpdesk.core.errors import UsernameTakenError
from helpdesk.issue.schemas import CommentCreate, IssueCreate, IssueUpdate
from helpdesk.user.schemas import UserCreate


def new_issue(**overrides):
    fields = {
        "title": "Cannot log in",
        "description": "Password reset email never arrives.",
        "customer_name": "Grace Hopper",
        "customer_email": "grace@example.com",
    }
    fields.update(overrides)
    return IssueCreate(**fields)


def test_create_applies_defaults(storage):
    issue = storage.create_issue(new_issue())
    assert issue.id
    assert issue.status == "open"
    assert issue.priority == "medium"
    assert issue.assigned_to is None
    assert issue.updated_at == issue.created_at


def test_round_trip_keeps_submitted_fields(storage):
    created = storage.create_issue(new_issue(priority="urgent", assigned_to="Sam"))
    fetched = storage.get_issue(created.id)
    assert fetched == created
    assert fetched.title == "Cannot log in"
    assert fetched.description == "Password reset email never arrives."
    assert fetched.customer_name == "Grace Hopper"
    assert fetched.customer_email == "grace@example.com"
    assert fetched.priority == "urgent"
    assert fetched.assigned_to == "Sam"


def test_get_unknown_issue_returns_none(storage):
    assert storage.get_issue("no-such-id") is None


def test_all_issues_newest_first(storage):
    ids = [storage.create_issue(new_issue(title=f"Issue {n}")).id for n in range(4)]
    listed = storage.get_all_issues()
    assert [i.id for i in listed] == list(reversed(ids))
    stamps = [i.created_at for i in listed]
    assert stamps == sorted(stamps, reverse=True)


def test_issues_by_customer_email_is_exact(storage):
    first = storage.create_issue(new_issue(customer_email="ann@example.com"))
    storage.create_issue(new_issue(customer_email="Ann@example.com"))
    storage.create_issue(new_issue(customer_email="ann@example.com.au"))
    second = storage.create_issue(new_issue(customer_email="ann@example.com"))

    found = storage.get_issues_by_customer_email("ann@example.com")
    assert [i.id for i in found] == [second.id, first.id]
    assert storage.get_issues_by_customer_email("nobody@example.com") == []


def test_update_merges_only_given_fields(storage):
    issue = storage.create_issue(new_issue())
    updated = storage.update_issue(issue.id, IssueUpdate(status="in-progress"))
    assert updated.status == "in-progress"
    assert updated.title == issue.title
    assert updated.priority == issue.priority
    assert updated.assigned_to is None
    assert updated.updated_at > issue.updated_at
    assert updated.updated_at >= updated.created_at
    assert storage.get_issue(issue.id) == updated


def test_update_refreshes_timestamp_every_time(storage):
    issue = storage.create_issue(new_issue())
    stamps = [issue.updated_at]
    for priority in ("high", "urgent", "low"):
        stamps.append(storage.update_issue(issue.id, IssueUpdate(priority=priority)).updated_at)
    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)


def test_updated_at_never_behind_created_at(storage, clock):
    issue = storage.create_issue(new_issue())
    clock.set(issue.created_at - timedelta(hours=1))
    updated = storage.update_issue(issue.id, IssueUpdate(status="resolved"))
    assert updated.updated_at >= updated.created_at


def test_assignee_can_be_cleared(storage):
    issue = storage.create_issue(new_issue(assigned_to="Sam"))
    updated = storage.update_issue(issue.id, IssueUpdate(assigned_to=None))
    assert updated.assigned_to is None


def test_update_unknown_issue_changes_nothing(storage):
    storage.create_issue(new_issue())
    before = storage.get_all_issues()
    assert storage.update_issue("no-such-id", IssueUpdate(status="resolved")) is None
    assert storage.get_all_issues() == before


def test_returned_records_are_copies(storage):
    issue = storage.create_issue(new_issue())
    issue.title = "changed locally"
    assert storage.get_issue(issue.id).title == "Cannot log in"


def test_comments_read_oldest_first(storage):
    issue = storage.create_issue(new_issue())
    other = storage.create_issue(new_issue(title="Other"))
    first = storage.create_comment(issue.id, CommentCreate(author="Grace", content="Any news?"))
    storage.create_comment(other.id, CommentCreate(author="Sam", content="Elsewhere"))
    second = storage.create_comment(
        issue.id, CommentCreate(author="Sam", content="Looking into it", is_internal=True)
    )

    thread = storage.get_comments_by_issue_id(issue.id)
    assert [c.id for c in thread] == [first.id, second.id]
    assert thread[0].is_internal is False
    assert thread[1].is_internal is True
    assert all(c.issue_id == issue.id for c in thread)
    assert storage.get_comments_by_issue_id("no-such-id") == []


def test_stats_on_empty_store(storage):
    stats = storage.get_issue_stats()
    assert (stats.open_issues, stats.in_progress, stats.resolved_today, stats.urgent) == (0, 0, 0, 0)


def test_stats_counts(storage, clock):
    today = clock.current

    clock.set(today - timedelta(days=1))
    d = storage.create_issue(new_issue(title="D"))
    storage.update_issue(d.id, IssueUpdate(status="resolved"))

    clock.set(today)
    storage.create_issue(new_issue(title="A"))
    b = storage.create_issue(new_issue(title="B"))
    storage.update_issue(b.id, IssueUpdate(status="in-progress"))
    c = storage.create_issue(new_issue(title="C"))
    storage.update_issue(c.id, IssueUpdate(status="resolved"))
    storage.create_issue(new_issue(title="E", priority="urgent"))

    stats = storage.get_issue_stats()
    assert stats.open_issues == 2
    assert stats.in_progress == 1
    assert stats.resolved_today == 1
    assert stats.urgent == 1


def test_urgent_counted_regardless_of_status(storage):
    issue = storage.create_issue(new_issue(priority="urgent"))
    storage.update_issue(issue.id, IssueUpdate(status="resolved"))
    stats = storage.get_issue_stats()
    assert stats.urgent == 1
    assert stats.open_issues == 0
    assert stats.resolved_today == 1


def test_users(storage):
    user = storage.create_user(UserCreate(username="agent", password="secret"))
    assert storage.get_user(user.id) == user
    assert storage.get_user_by_username("agent") == user
    assert storage.get_user_by_username("someone") is None
    assert storage.get_user("no-such-id") is None


def test_duplicate_username_rejected(storage):
    storage.create_user(UserCreate(username="agent", password="secret"))
    with pytest.raises(UsernameTakenError):
        storage.create_user(UserCreate(username="agent", password="other"))
