# helpdesk/issue/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from helpdesk.issue.entities import Priority, Status

# camelCase on the wire, snake_case accepted too
WIRE_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class IssueBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=1)

    model_config = WIRE_CONFIG


class IssueCreate(IssueBase):
    # New issues always start open, so there is no status field here
    priority: Priority = Priority.MEDIUM
    assigned_to: str | None = None

    model_config = {**WIRE_CONFIG, "use_enum_values": True, "validate_default": True}

    @field_validator("assigned_to")
    @classmethod
    def blank_is_unassigned(cls, value: str | None) -> str | None:
        return value or None


class IssueUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    customer_name: str | None = Field(default=None, min_length=1)
    customer_email: str | None = Field(default=None, min_length=1)
    priority: Priority | None = None
    status: Status | None = None
    assigned_to: str | None = None

    model_config = {**WIRE_CONFIG, "use_enum_values": True}

    @field_validator("assigned_to")
    @classmethod
    def blank_is_unassigned(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def only_assignee_nullable(self):
        for name in sorted(self.model_fields_set):
            if name != "assigned_to" and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class IssueOut(IssueBase):
    id: str
    priority: Priority
    status: Status
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {**WIRE_CONFIG, "from_attributes": True}


class CommentCreate(BaseModel):
    author: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    is_internal: bool = False

    model_config = WIRE_CONFIG


class CommentOut(BaseModel):
    id: str
    issue_id: str
    author: str
    content: str
    is_internal: bool
    created_at: datetime

    model_config = {**WIRE_CONFIG, "from_attributes": True}


class IssueDetail(IssueOut):
    comments: list[CommentOut] = []


class IssueStatsOut(BaseModel):
    open_issues: int
    in_progress: int
    resolved_today: int
    urgent: int

    model_config = {**WIRE_CONFIG, "from_attributes": True}
