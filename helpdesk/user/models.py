# helpdesk/user/models.py
from sqlalchemy import Column, String, Text

from helpdesk.core.database import Base


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(Text, nullable=False, unique=True)
    # Stored as given; nothing checks it yet
    password = Column(Text, nullable=False)
