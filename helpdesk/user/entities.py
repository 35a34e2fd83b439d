# helpdesk/user/entities.py
from dataclasses import dataclass


@dataclass(slots=True)
class User:
    id: str
    username: str
    password: str
