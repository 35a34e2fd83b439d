# helpdesk/storage/base.py
from abc import ABC, abstractmethod
from datetime import datetime, time
from typing import Callable

from helpdesk.issue.entities import Comment, Issue, IssueStats
from helpdesk.issue.schemas import CommentCreate, IssueCreate, IssueUpdate
from helpdesk.user.entities import User
from helpdesk.user.schemas import UserCreate

Clock = Callable[[], datetime]


# Records handed out are detached copies; issue lists newest first, comments oldest first
class Storage(ABC):
    backend: str

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        return self._clock()

    def touch(self, previous: datetime) -> datetime:
        # A clock stepping backwards must not move updated_at behind created_at
        return max(self.now(), previous)

    def start_of_today(self) -> datetime:
        return datetime.combine(self.now().date(), time.min)

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, payload: UserCreate) -> User:
        """Raises UsernameTakenError when the username exists."""

    # Issues
    @abstractmethod
    def get_all_issues(self) -> list[Issue]: ...

    @abstractmethod
    def get_issue(self, issue_id: str) -> Issue | None: ...

    @abstractmethod
    def get_issues_by_customer_email(self, email: str) -> list[Issue]:
        """Exact, case-sensitive match on customer_email."""

    @abstractmethod
    def create_issue(self, payload: IssueCreate) -> Issue: ...

    @abstractmethod
    def update_issue(self, issue_id: str, payload: IssueUpdate) -> Issue | None:
        """Returns None for an unknown id and writes nothing."""

    # Comments
    @abstractmethod
    def get_comments_by_issue_id(self, issue_id: str) -> list[Comment]: ...

    @abstractmethod
    def create_comment(self, issue_id: str, payload: CommentCreate) -> Comment:
        """Does not check that the issue exists; callers do."""

    # Statistics
    @abstractmethod
    def get_issue_stats(self) -> IssueStats: ...
