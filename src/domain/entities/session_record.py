"""
SessionRecord Entity

Stores one row per issued session secret (refresh token).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import RevocationReason, SessionState


class SessionRecord(SQLModel, table=True):
    """
    SessionRecord entity - one record per issued session secret.

    Business Rules:
    - Only the SHA-256 hash of the secret is stored, never the plaintext
    - A secret is usable for exactly one rotation
    - revoked_at is set once and never cleared
    - replaced_by_hash is only set together with reason "Rotated"
    - Expired is derived from expires_at, never written
    """

    __tablename__ = "session_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(max_length=255, nullable=False)
    secret_hash: str = Field(max_length=64, unique=True, index=True)  # SHA-256 hex

    # Timestamps (naive UTC)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Revocation audit trail
    replaced_by_hash: Optional[str] = Field(default=None, max_length=64)
    reason_revoked: Optional[str] = Field(default=None, max_length=255)

    created_by_ip: Optional[str] = Field(default=None, max_length=45)
    revoked_by_ip: Optional[str] = Field(default=None, max_length=45)

    __table_args__ = (
        Index("idx_session_record_expires_at", "expires_at"),
        Index("idx_session_record_user_revoked", "user_id", "revoked_at"),
    )

    def is_active(self, now: datetime) -> bool:
        """Neither revoked nor past its expiry at ``now``"""
        return self.revoked_at is None and self.expires_at > now

    def state(self, now: datetime) -> SessionState:
        if self.revoked_at is not None:
            if self.reason_revoked == RevocationReason.rotated.value:
                return SessionState.rotated
            return SessionState.revoked
        if self.expires_at <= now:
            return SessionState.expired
        return SessionState.active
