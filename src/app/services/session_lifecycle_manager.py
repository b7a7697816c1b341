"""
Session Lifecycle Manager

Issues, rotates and revokes session secrets, and tears down every session of
a user when a spent secret is presented again.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from src.app.services.token_codec import generate_secret, hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RevocationReason, SessionRecord
from src.domain.errors import TokenCompromised, TokenNotFound

logger = logging.getLogger(__name__)


class SessionLifecycleManager:
    """
    Core of the refresh-token lifecycle.

    Business Rules:
    - Plaintext secrets are returned to callers, only hashes reach the store
    - Each secret is usable for exactly one rotation
    - Presenting a rotated, revoked or expired secret revokes all active
      sessions of its owner (reuse detection)
    - Revoking an already revoked secret is a no-op, not an error
    - No state is kept between calls; the store is the source of truth
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_lifetime: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        if session_lifetime <= timedelta(0):
            raise ValueError("session_lifetime must be positive")
        self.uow = uow
        self.session_lifetime = session_lifetime
        self.clock = clock

    async def issue(self, user_id: str, created_by_ip: Optional[str] = None) -> str:
        """
        Issue a new session secret for an already authenticated user.

        Args:
            user_id: Verified user identifier
            created_by_ip: Client address, advisory only

        Returns:
            The plaintext secret. It is never returned again.

        Raises:
            ValueError: user_id is empty
            StorageError: insert failed, nothing was persisted
        """
        if not user_id:
            raise ValueError("user_id must be a non-empty identifier")

        secret = generate_secret()
        now = self.clock()
        record = SessionRecord(
            user_id=user_id,
            secret_hash=hash_secret(secret),
            created_at=now,
            expires_at=now + self.session_lifetime,
            created_by_ip=created_by_ip,
        )

        async with self.uow:
            await self.uow.session_records.insert(record)
            await self.uow.commit()

        logger.info(f"Issued session {record.id} for user {user_id}")
        return secret

    async def rotate(self, secret: str, ip_address: Optional[str] = None) -> str:
        """
        Exchange an active secret for a fresh one.

        The successor insert and the conditional revocation of the predecessor
        share one transaction. The revocation only matches while revoked_at
        IS NULL, so of two concurrent callers presenting the same secret only
        one can win; the other is handled exactly like a replay.

        Args:
            secret: Plaintext secret presented by the client
            ip_address: Client address, advisory only

        Returns:
            The new plaintext secret

        Raises:
            TokenNotFound: secret was never issued
            TokenCompromised: secret was already spent or expired; every
                active session of its owner has been revoked
            StorageError: persistence failed, the old record is unchanged
        """
        secret_hash = hash_secret(secret)
        now = self.clock()

        async with self.uow:
            record = await self.uow.session_records.find_by_hash(secret_hash)
            if record is None:
                raise TokenNotFound()

            user_id = record.user_id
            if not record.is_active(now):
                await self._revoke_all_for_user(user_id, now)
                raise TokenCompromised()

            new_secret = generate_secret()
            new_hash = hash_secret(new_secret)
            successor = SessionRecord(
                user_id=user_id,
                secret_hash=new_hash,
                created_at=now,
                expires_at=now + self.session_lifetime,
                created_by_ip=ip_address,
            )
            await self.uow.session_records.insert(successor)

            rotated = await self.uow.session_records.update_revocation(
                secret_hash,
                revoked_at=now,
                reason=RevocationReason.rotated.value,
                replaced_by_hash=new_hash,
                revoked_by_ip=ip_address,
            )
            if not rotated:
                # Lost the race to a concurrent rotation: drop our successor
                await self.uow.rollback()
                logger.warning(f"Concurrent rotation detected on session {record.id}")
                await self._revoke_all_for_user(user_id, now)
                raise TokenCompromised()

            await self.uow.commit()

        logger.info(f"Rotated session {record.id} to {successor.id} for user {user_id}")
        return new_secret

    async def revoke(
        self,
        secret: str,
        reason: str = RevocationReason.revoked_by_user.value,
        revoked_by_ip: Optional[str] = None,
    ) -> bool:
        """
        Revoke a single session (logout). Does not cascade.

        Returns:
            True if this call stamped the record as revoked (expired records
            included), False when the secret is unknown or already revoked
        """
        if not secret:
            return False

        secret_hash = hash_secret(secret)
        now = self.clock()

        async with self.uow:
            record = await self.uow.session_records.find_by_hash(secret_hash)
            if record is None or record.revoked_at is not None:
                return False

            revoked = await self.uow.session_records.update_revocation(
                secret_hash,
                revoked_at=now,
                reason=reason,
                revoked_by_ip=revoked_by_ip,
            )
            await self.uow.commit()

        if revoked:
            logger.info(f"Revoked session {record.id} for user {record.user_id}")
        return revoked

    async def get_by_hash(self, secret: str) -> Optional[SessionRecord]:
        """Look up the record of a plaintext secret without side effects"""
        async with self.uow:
            return await self.uow.session_records.find_by_hash(hash_secret(secret))

    async def _revoke_all_for_user(self, user_id: str, now: datetime) -> int:
        count = await self.uow.session_records.bulk_revoke_active_for_user(
            user_id,
            revoked_at=now,
            reason=RevocationReason.attempted_reuse.value,
        )
        await self.uow.commit()
        logger.warning(
            f"Refresh token reuse detected for user {user_id}: revoked {count} session(s)"
        )
        return count
