# helpdesk/client/forms.py
from pydantic import Field, field_validator, validate_email

from helpdesk.issue.schemas import IssueCreate


# Stricter than the server's create schema; checked before anything is sent
class IssueSubmissionForm(IssueCreate):
    customer_name: str = Field(..., min_length=1, description="Name is required")
    customer_email: str = Field(..., min_length=1, description="Valid email is required")
    title: str = Field(..., min_length=1, description="Title is required")
    description: str = Field(..., min_length=10, description="At least 10 characters")

    @field_validator("customer_email")
    @classmethod
    def check_email(cls, value: str) -> str:
        # Submitted as typed; the lookup by email is an exact match
        validate_email(value)
        return value

    def to_issue(self) -> IssueCreate:
        return IssueCreate.model_validate(self.model_dump())
