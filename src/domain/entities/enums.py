"""
Session Domain Enums

All enumeration types used by the session record entity.
"""

from enum import Enum


class RevocationReason(str, Enum):
    """Advisory classification stored in reason_revoked"""

    rotated = "Rotated"
    revoked_by_user = "Revoked by user"
    attempted_reuse = "Attempted reuse of revoked or expired token"


class SessionState(str, Enum):
    """Derived lifecycle state of a session record"""

    active = "active"
    rotated = "rotated"
    revoked = "revoked"
    expired = "expired"
