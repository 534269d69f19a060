"""User table"""
from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..storage.database import Base


class UserRecord(Base):
    """A reviewer. ``id`` fixes roster order."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    team_name: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, index=True
    )  # Weak reference to teams.team_name (no FK)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    def __repr__(self) -> str:
        return f"<UserRecord(user_id='{self.user_id}', team_name='{self.team_name}', is_active={self.is_active})>"
