# helpdesk/issue/models.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, false, func

from helpdesk.core.database import Base


class IssueRow(Base):
    __tablename__ = "issues"

    id = Column(String(36), primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False, index=True)
    priority = Column(String(16), nullable=False, default="medium", server_default="medium")
    status = Column(String(16), nullable=False, default="open", server_default="open", index=True)
    assigned_to = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now())


class CommentRow(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True)
    # No ON DELETE rule: issues are never deleted
    issue_id = Column(String(36), ForeignKey("issues.id"), nullable=False, index=True)
    author = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    is_internal = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime, nullable=False, server_default=func.now())
