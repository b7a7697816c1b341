"""
Session Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import RevocationReason, SessionState

# Export all entities
from .session_record import SessionRecord

__all__ = [
    # Enums
    "RevocationReason",
    "SessionState",
    # Entities
    "SessionRecord",
]
