from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_record_repository import ISessionRecordRepository
from src.domain.entities import SessionRecord
from src.domain.errors import StorageError


@contextmanager
def storage_errors(operation: str):
    """Re-raise any SQLAlchemy failure as StorageError"""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"Session storage failure during {operation}") from exc


class SessionRecordRepository(ISessionRecordRepository):
    """Session record repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, record: SessionRecord) -> SessionRecord:
        """Create a new record (unique secret_hash rejects collisions)"""
        with storage_errors("insert"):
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        return record

    async def find_by_hash(self, secret_hash: str) -> Optional[SessionRecord]:
        """
        Get record by secret hash.

        The record is expunged so it stays readable after the surrounding
        transaction ends; writes always go through explicit statements.
        """
        with storage_errors("lookup"):
            stmt = (
                select(SessionRecord)
                .where(SessionRecord.secret_hash == secret_hash)
                .execution_options(populate_existing=True)
            )
            result = await self.session.execute(stmt)
            record = result.scalar_one_or_none()
        if record is not None:
            self.session.expunge(record)
        return record

    async def update_revocation(
        self,
        secret_hash: str,
        revoked_at: datetime,
        reason: str,
        replaced_by_hash: Optional[str] = None,
        revoked_by_ip: Optional[str] = None,
    ) -> bool:
        """Revoke one record if it is not revoked yet"""
        stmt = (
            update(SessionRecord)
            .where(
                SessionRecord.secret_hash == secret_hash,
                SessionRecord.revoked_at == None,  # noqa: E711
            )
            .values(
                revoked_at=revoked_at,
                reason_revoked=reason,
                replaced_by_hash=replaced_by_hash,
                revoked_by_ip=revoked_by_ip,
            )
            .execution_options(synchronize_session=False)
        )
        with storage_errors("revocation"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def bulk_revoke_active_for_user(
        self, user_id: str, revoked_at: datetime, reason: str
    ) -> int:
        """Revoke all non-revoked records of a user"""
        stmt = (
            update(SessionRecord)
            .where(
                SessionRecord.user_id == user_id,
                SessionRecord.revoked_at == None,  # noqa: E711
            )
            .values(revoked_at=revoked_at, reason_revoked=reason)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("bulk revocation"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount

    async def delete_expired(self, before: datetime) -> int:
        """Delete records expired as of ``before``"""
        stmt = (
            delete(SessionRecord)
            .where(SessionRecord.expires_at <= before)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("expired cleanup"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount

    async def list_by_user(self, user_id: str) -> List[SessionRecord]:
        """Get all records for a user"""
        stmt = (
            select(SessionRecord)
            .where(SessionRecord.user_id == user_id)
            .order_by(SessionRecord.created_at)
            .execution_options(populate_existing=True)
        )
        with storage_errors("listing"):
            result = await self.session.execute(stmt)
            records = list(result.scalars().all())
        for record in records:
            self.session.expunge(record)
        return records
