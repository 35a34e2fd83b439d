# helpdesk/storage/memory.py
from dataclasses import replace
from uuid import uuid4

from helpdesk.core.errors import UsernameTakenError
from helpdesk.issue.entities import Comment, Issue, IssueStats, Priority, Status
from helpdesk.issue.schemas import CommentCreate, IssueCreate, IssueUpdate
from helpdesk.storage.base import Clock, Storage
from helpdesk.user.entities import User
from helpdesk.user.schemas import UserCreate


# No persistence and no locking: concurrent updates are last-write-wins
class MemoryStorage(Storage):
    backend = "memory"

    def __init__(self, clock: Clock | None = None):
        super().__init__(clock)
        self._users: dict[str, User] = {}
        self._issues: dict[str, Issue] = {}
        self._comments: dict[str, Comment] = {}

    def get_user(self, user_id):
        user = self._users.get(user_id)
        return replace(user) if user else None

    def get_user_by_username(self, username):
        for user in self._users.values():
            if user.username == username:
                return replace(user)
        return None

    def create_user(self, payload: UserCreate) -> User:
        if self.get_user_by_username(payload.username):
            raise UsernameTakenError(payload.username)
        user = User(id=str(uuid4()), **payload.model_dump())
        self._users[user.id] = user
        return replace(user)

    def get_all_issues(self):
        return self._newest_first(self._issues.values())

    def get_issue(self, issue_id):
        issue = self._issues.get(issue_id)
        return replace(issue) if issue else None

    def get_issues_by_customer_email(self, email):
        return self._newest_first(
            i for i in self._issues.values() if i.customer_email == email
        )

    def create_issue(self, payload: IssueCreate) -> Issue:
        now = self.now()
        issue = Issue(
            id=str(uuid4()),
            status=Status.OPEN.value,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        self._issues[issue.id] = issue
        return replace(issue)

    def update_issue(self, issue_id, payload: IssueUpdate):
        issue = self._issues.get(issue_id)
        if issue is None:
            return None
        updated = replace(issue, **payload.changes(), updated_at=self.touch(issue.updated_at))
        self._issues[issue_id] = updated
        return replace(updated)

    def get_comments_by_issue_id(self, issue_id):
        thread = [replace(c) for c in self._comments.values() if c.issue_id == issue_id]
        return sorted(thread, key=lambda c: c.created_at)

    def create_comment(self, issue_id, payload: CommentCreate) -> Comment:
        comment = Comment(
            id=str(uuid4()),
            issue_id=issue_id,
            created_at=self.now(),
            **payload.model_dump(),
        )
        self._comments[comment.id] = comment
        return replace(comment)

    def get_issue_stats(self) -> IssueStats:
        issues = list(self._issues.values())
        today = self.start_of_today()
        return IssueStats(
            open_issues=sum(1 for i in issues if i.status == Status.OPEN),
            in_progress=sum(1 for i in issues if i.status == Status.IN_PROGRESS),
            resolved_today=sum(
                1 for i in issues if i.status == Status.RESOLVED and i.updated_at >= today
            ),
            urgent=sum(1 for i in issues if i.priority == Priority.URGENT),
        )

    @staticmethod
    def _newest_first(issues):
        return sorted((replace(i) for i in issues), key=lambda i: i.created_at, reverse=True)
