"""Pull request tables"""
from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..schemas.pull_request import PullRequestStatus
from ..storage.database import Base
from .types import UTCDateTime


class PullRequestRecord(Base):
    """A pull request."""

    __tablename__ = "pull_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pull_request_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    pull_request_name: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    author_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PullRequestStatus.OPEN.value, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    merged_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    # Relationships
    reviewers: Mapped[list["PullRequestReviewerRecord"]] = relationship(
        "PullRequestReviewerRecord",
        back_populates="pull_request",
        cascade="all, delete-orphan",
        order_by="PullRequestReviewerRecord.position",
        lazy="selectin",
    )

    @property
    def assigned_reviewers(self) -> list[str]:
        return [r.user_id for r in self.reviewers]

    def __repr__(self) -> str:
        return f"<PullRequestRecord(pull_request_id='{self.pull_request_id}', status='{self.status}')>"


class PullRequestReviewerRecord(Base):
    """One reviewer slot on a pull request."""

    __tablename__ = "pull_request_reviewers"
    __table_args__ = (
        UniqueConstraint("pull_request_id", "user_id", name="uq_pull_request_reviewer"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pull_request_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    pull_request: Mapped["PullRequestRecord"] = relationship(
        "PullRequestRecord", back_populates="reviewers"
    )

    def __repr__(self) -> str:
        return f"<PullRequestReviewerRecord(pull_request_id='{self.pull_request_id}', user_id='{self.user_id}')>"
