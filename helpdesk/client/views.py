# helpdesk/client/views.py
import logging
from dataclasses import dataclass, field
from typing import Iterable

from helpdesk.client.api import SupportClient
from helpdesk.client.forms import IssueSubmissionForm
from helpdesk.issue.entities import Priority, Status
from helpdesk.issue.schemas import (
    CommentCreate,
    CommentOut,
    IssueDetail,
    IssueOut,
    IssueStatsOut,
    IssueUpdate,
)

logger = logging.getLogger(__name__)

UNASSIGNED = "unassigned"


def filter_issues(
    issues: Iterable[IssueOut],
    search: str = "",
    status: str | None = None,
    priority: str | None = None,
) -> list[IssueOut]:
    """Case-insensitive search plus exact status/priority, AND-combined."""
    needle = (search or "").lower()

    def matches(issue: IssueOut) -> bool:
        if needle and not any(
            needle in text.lower()
            for text in (issue.title, issue.description, issue.customer_name, issue.customer_email)
        ):
            return False
        if status and issue.status != status:
            return False
        if priority and issue.priority != priority:
            return False
        return True

    return [i for i in issues if matches(i)]


class CustomerPortal:
    def __init__(self, client: SupportClient):
        self.client = client

    def submit(self, form: IssueSubmissionForm) -> IssueOut:
        issue = self.client.create_issue(form.to_issue())
        logger.info("Submitted issue %s for %s", issue.id, issue.customer_email)
        return issue

    def my_issues(self, email: str) -> list[IssueOut]:
        # Nothing is fetched until the customer enters an address
        if not email:
            return []
        return self.client.issues_for_customer(email)


@dataclass
class DashboardSnapshot:
    issues: list[IssueOut] = field(default_factory=list)
    stats: IssueStatsOut | None = None

    def filtered(self, search: str = "", status: str | None = None, priority: str | None = None):
        return filter_issues(self.issues, search=search, status=status, priority=priority)


class TeamDashboard:
    def __init__(self, client: SupportClient):
        self.client = client

    def load(self) -> DashboardSnapshot:
        return DashboardSnapshot(issues=self.client.list_issues(), stats=self.client.stats())

    def detail(self, issue_id: str) -> IssueDetail:
        return self.client.get_issue(issue_id)

    def set_status(self, issue_id: str, status: Status | str) -> IssueOut:
        return self.client.update_issue(issue_id, IssueUpdate(status=status))

    def set_priority(self, issue_id: str, priority: Priority | str) -> IssueOut:
        return self.client.update_issue(issue_id, IssueUpdate(priority=priority))

    def assign(self, issue_id: str, assignee: str | None) -> IssueOut:
        if assignee == UNASSIGNED:
            assignee = None
        return self.client.update_issue(issue_id, IssueUpdate(assigned_to=assignee))

    def resolve(self, issue_id: str) -> IssueOut:
        return self.set_status(issue_id, Status.RESOLVED)

    def add_comment(
        self, issue_id: str, author: str, content: str, notify_customer: bool = False
    ) -> CommentOut:
        # The checkbox only decides visibility; no email goes out
        comment = CommentCreate(author=author, content=content, is_internal=not notify_customer)
        return self.client.add_comment(issue_id, comment)
