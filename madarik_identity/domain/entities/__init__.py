"""
Identity Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    InvitationStatus,
    Locale,
    TokenPurpose,
    UserRole,
)

# Export all entities
from .user import User
from .invitation import Invitation
from .recovery_token import RecoveryToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InvitationStatus",
    "Locale",
    "TokenPurpose",
    "UserRole",
    # Entities
    "User",
    "Invitation",
    "RecoveryToken",
    "AuditEvent",
]
