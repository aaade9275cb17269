"""Back-office user entities

Admin and Staff records are what an order's placer reference
(``placed_by_kind`` + ``placed_by_id``) points to.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, IdType


class Admin(BaseModel, table=True):
    """Administrator account"""

    __tablename__ = "admins"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    username: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
    )

    is_super_admin: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.username


class Staff(BaseModel, table=True):
    """Staff member account"""

    __tablename__ = "staff"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    role: str = Field(sa_column=Column(String(100), nullable=False))

    username: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
    )

    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    phone: Optional[str] = Field(default=None, sa_column=Column(String(30), nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return self.name or self.username
