"""SQLAlchemy repositories (SQLite through aiosqlite, PostgreSQL through asyncpg)."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import (
    PRExistsError,
    PRNotFoundError,
    StorageError,
    TeamExistsError,
    UserNotFoundError,
)
from ..models import PullRequestRecord, PullRequestReviewerRecord, TeamRecord, UserRecord
from ..schemas import PullRequest, User
from .base import PullRequestMutator, PullRequestRepository, TeamRepository, UserRepository
from .database import Database
from .locks import KeyedLock


class SqlTeamRepository(TeamRepository):
    """Teams stored in the ``teams`` table."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, team_name: str) -> None:
        try:
            async with self.db.session() as session:
                session.add(TeamRecord(team_name=team_name))
                await session.commit()
        except IntegrityError as e:
            raise TeamExistsError() from e
        except SQLAlchemyError as e:
            raise StorageError(f"failed to create team {team_name}: {e}") from e

    async def exists(self, team_name: str) -> bool:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(TeamRecord.id).where(TeamRecord.team_name == team_name)
                )
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to look up team {team_name}: {e}") from e

    async def list_names(self) -> list[str]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(TeamRecord.team_name).order_by(TeamRecord.id)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(f"failed to list teams: {e}") from e


class SqlUserRepository(UserRepository):
    """Users stored in the ``users`` table."""

    def __init__(self, db: Database):
        self.db = db

    async def get(self, user_id: str) -> Optional[User]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(UserRecord).where(UserRecord.user_id == user_id)
                )
                record = result.scalar_one_or_none()
                return User.model_validate(record) if record else None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to find user {user_id}: {e}") from e

    async def upsert(self, user: User) -> User:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(UserRecord).where(UserRecord.user_id == user.user_id)
                )
                record = result.scalar_one_or_none()
                if record is None:
                    record = UserRecord(user_id=user.user_id)
                    session.add(record)
                record.username = user.username
                record.team_name = user.team_name
                record.is_active = user.is_active
                await session.commit()
                return User.model_validate(record)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to save user {user.user_id}: {e}") from e

    async def set_active(self, user_id: str, is_active: bool) -> User:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(UserRecord).where(UserRecord.user_id == user_id)
                )
                record = result.scalar_one_or_none()
                if record is None:
                    raise UserNotFoundError(f"user {user_id} not found")
                record.is_active = is_active
                await session.commit()
                return User.model_validate(record)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to update user {user_id}: {e}") from e

    async def list_all(self) -> list[User]:
        try:
            async with self.db.session() as session:
                result = await session.execute(select(UserRecord).order_by(UserRecord.id))
                return [User.model_validate(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError(f"failed to list users: {e}") from e

    async def list_by_team(self, team_name: str) -> list[User]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(UserRecord)
                    .where(UserRecord.team_name == team_name)
                    .order_by(UserRecord.id)
                )
                return [User.model_validate(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError(f"failed to list users of team {team_name}: {e}") from e


class SqlPullRequestRepository(PullRequestRepository):
    """Pull requests stored in ``pull_requests`` with one row per reviewer slot.

    ``atomic_update`` holds an in-process lock for the id and, on engines
    that support it, a ``SELECT ... FOR UPDATE`` row lock for the duration
    of the transaction.
    """

    def __init__(self, db: Database):
        self.db = db
        self._locks = KeyedLock()

    @staticmethod
    def _apply(record: PullRequestRecord, pr: PullRequest) -> None:
        record.pull_request_name = pr.pull_request_name
        record.status = pr.status.value
        record.merged_at = pr.merged_at

        # Keep surviving rows so no (pull_request_id, user_id) pair is reinserted
        existing = {r.user_id: r for r in record.reviewers}
        record.reviewers = [
            existing.get(user_id) or PullRequestReviewerRecord(user_id=user_id)
            for user_id in pr.assigned_reviewers
        ]
        for position, reviewer in enumerate(record.reviewers):
            reviewer.position = position

    async def create(self, pull_request: PullRequest) -> PullRequest:
        pull_request.check_reviewers()
        try:
            async with self.db.session() as session:
                record = PullRequestRecord(
                    pull_request_id=pull_request.pull_request_id,
                    pull_request_name=pull_request.pull_request_name,
                    author_id=pull_request.author_id,
                    status=pull_request.status.value,
                    created_at=pull_request.created_at or datetime.now(timezone.utc),
                    merged_at=pull_request.merged_at,
                    reviewers=[
                        PullRequestReviewerRecord(user_id=user_id, position=position)
                        for position, user_id in enumerate(pull_request.assigned_reviewers)
                    ],
                )
                session.add(record)
                await session.commit()
        except IntegrityError as e:
            raise PRExistsError() from e
        except SQLAlchemyError as e:
            raise StorageError(
                f"failed to create PR {pull_request.pull_request_id}: {e}"
            ) from e
        return pull_request.model_copy(deep=True)

    async def get(self, pull_request_id: str) -> Optional[PullRequest]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(PullRequestRecord).where(
                        PullRequestRecord.pull_request_id == pull_request_id
                    )
                )
                record = result.scalar_one_or_none()
                return PullRequest.model_validate(record) if record else None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to find PR {pull_request_id}: {e}") from e

    async def atomic_update(
        self, pull_request_id: str, mutator: PullRequestMutator
    ) -> PullRequest:
        async with self._locks.acquire(pull_request_id):
            try:
                async with self.db.session() as session:
                    async with session.begin():
                        query = select(PullRequestRecord).where(
                            PullRequestRecord.pull_request_id == pull_request_id
                        )
                        if self.db.supports_row_locks:
                            query = query.with_for_update()
                        result = await session.execute(query)
                        record = result.scalar_one_or_none()
                        if record is None:
                            raise PRNotFoundError()

                        updated = mutator(PullRequest.model_validate(record))
                        updated.check_reviewers()
                        self._apply(record, updated)
                return updated
            except SQLAlchemyError as e:
                raise StorageError(f"failed to update PR {pull_request_id}: {e}") from e

    async def find_by_reviewer(self, user_id: str) -> list[PullRequest]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(PullRequestRecord)
                    .join(PullRequestReviewerRecord)
                    .where(PullRequestReviewerRecord.user_id == user_id)
                    .order_by(PullRequestRecord.id)
                )
                return [PullRequest.model_validate(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError(f"failed to find PRs of reviewer {user_id}: {e}") from e

    async def list_all(self) -> list[PullRequest]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(PullRequestRecord).order_by(PullRequestRecord.id)
                )
                return [PullRequest.model_validate(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StorageError(f"failed to list PRs: {e}") from e
