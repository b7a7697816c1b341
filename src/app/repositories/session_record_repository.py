from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import SessionRecord


class ISessionRecordRepository(ABC):
    """Session record store interface - application layer"""

    @abstractmethod
    async def insert(self, record: SessionRecord) -> SessionRecord:
        """Create a new record. Fails on secret hash collision, never overwrites."""
        pass

    @abstractmethod
    async def find_by_hash(self, secret_hash: str) -> Optional[SessionRecord]:
        """Point lookup by secret hash, returns a detached snapshot"""
        pass

    @abstractmethod
    async def update_revocation(
        self,
        secret_hash: str,
        revoked_at: datetime,
        reason: str,
        replaced_by_hash: Optional[str] = None,
        revoked_by_ip: Optional[str] = None,
    ) -> bool:
        """
        Revoke a single record, conditioned on revoked_at IS NULL.

        Returns True only if this call performed the transition.
        """
        pass

    @abstractmethod
    async def bulk_revoke_active_for_user(
        self, user_id: str, revoked_at: datetime, reason: str
    ) -> int:
        """Revoke every non-revoked record of a user in one statement. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, before: datetime) -> int:
        """Delete records whose expires_at <= before. Returns count."""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[SessionRecord]:
        """All records of a user, oldest first"""
        pass
