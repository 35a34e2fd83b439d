# helpdesk/storage/database.py
from uuid import uuid4

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from helpdesk.core.database import init_db
from helpdesk.core.errors import UsernameTakenError
from helpdesk.issue.entities import Comment, Issue, IssueStats, Priority, Status
from helpdesk.issue.models import CommentRow, IssueRow
from helpdesk.issue.schemas import CommentCreate, IssueCreate, IssueUpdate
from helpdesk.storage.base import Clock, Storage
from helpdesk.user.entities import User
from helpdesk.user.models import UserRow
from helpdesk.user.schemas import UserCreate


def _issue(row: IssueRow) -> Issue:
    return Issue(
        id=row.id,
        title=row.title,
        description=row.description,
        customer_name=row.customer_name,
        customer_email=row.customer_email,
        priority=row.priority,
        status=row.status,
        assigned_to=row.assigned_to,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _comment(row: CommentRow) -> Comment:
    return Comment(
        id=row.id,
        issue_id=row.issue_id,
        author=row.author,
        content=row.content,
        is_internal=row.is_internal,
        created_at=row.created_at,
    )


def _user(row: UserRow) -> User:
    return User(id=row.id, username=row.username, password=row.password)


def _count(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


# One session and one commit per operation
class DatabaseStorage(Storage):
    backend = "database"

    def __init__(self, session_factory: sessionmaker, clock: Clock | None = None):
        super().__init__(clock)
        self._session_factory = session_factory
        init_db(session_factory.kw["bind"])

    def _session(self) -> Session:
        return self._session_factory()

    def get_user(self, user_id):
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return _user(row) if row else None

    def get_user_by_username(self, username):
        with self._session() as db:
            row = db.execute(
                select(UserRow).where(UserRow.username == username)
            ).scalar_one_or_none()
            return _user(row) if row else None

    def create_user(self, payload: UserCreate) -> User:
        with self._session() as db:
            row = UserRow(id=str(uuid4()), **payload.model_dump())
            db.add(row)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise UsernameTakenError(payload.username) from exc
            return _user(row)

    def get_all_issues(self):
        with self._session() as db:
            rows = db.execute(
                select(IssueRow).order_by(IssueRow.created_at.desc())
            ).scalars().all()
            return [_issue(r) for r in rows]

    def get_issue(self, issue_id):
        with self._session() as db:
            row = db.get(IssueRow, issue_id)
            return _issue(row) if row else None

    def get_issues_by_customer_email(self, email):
        with self._session() as db:
            rows = db.execute(
                select(IssueRow)
                .where(IssueRow.customer_email == email)
                .order_by(IssueRow.created_at.desc())
            ).scalars().all()
            return [_issue(r) for r in rows]

    def create_issue(self, payload: IssueCreate) -> Issue:
        now = self.now()
        with self._session() as db:
            row = IssueRow(
                id=str(uuid4()),
                status=Status.OPEN.value,
                created_at=now,
                updated_at=now,
                **payload.model_dump(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _issue(row)

    def update_issue(self, issue_id, payload: IssueUpdate):
        with self._session() as db:
            row = db.get(IssueRow, issue_id)
            if row is None:
                return None
            for field, value in payload.changes().items():
                setattr(row, field, value)
            row.updated_at = self.touch(row.updated_at)
            db.commit()
            db.refresh(row)
            return _issue(row)

    def get_comments_by_issue_id(self, issue_id):
        with self._session() as db:
            rows = db.execute(
                select(CommentRow)
                .where(CommentRow.issue_id == issue_id)
                .order_by(CommentRow.created_at.asc())
            ).scalars().all()
            return [_comment(r) for r in rows]

    def create_comment(self, issue_id, payload: CommentCreate) -> Comment:
        with self._session() as db:
            row = CommentRow(
                id=str(uuid4()),
                issue_id=issue_id,
                created_at=self.now(),
                **payload.model_dump(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _comment(row)

    def get_issue_stats(self) -> IssueStats:
        today = self.start_of_today()
        with self._session() as db:
            counts = db.execute(
                select(
                    _count(IssueRow.status == Status.OPEN.value),
                    _count(IssueRow.status == Status.IN_PROGRESS.value),
                    _count(
                        (IssueRow.status == Status.RESOLVED.value)
                        & (IssueRow.updated_at >= today)
                    ),
                    _count(IssueRow.priority == Priority.URGENT.value),
                )
            ).one()
        open_issues, in_progress, resolved_today, urgent = (int(c) for c in counts)
        return IssueStats(
            open_issues=open_issues,
            in_progress=in_progress,
            resolved_today=resolved_today,
            urgent=urgent,
        )
