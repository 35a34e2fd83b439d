# helpdesk/issue/entities.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Status(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


@dataclass(slots=True)
class Issue:
    id: str
    title: str
    description: str
    customer_name: str
    customer_email: str
    priority: str
    status: str
    assigned_to: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class Comment:
    id: str
    issue_id: str
    author: str
    content: str
    is_internal: bool
    created_at: datetime


@dataclass(slots=True)
class IssueStats:
    open_issues: int
    in_progress: int
    resolved_today: int
    urgent: int
