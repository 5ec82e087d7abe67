"""
Identity Domain Enums

All enumeration types used across domain entities.
Member names equal their values so the stored text matches either.
"""

from enum import Enum


class UserRole(str, Enum):
    """Back-office role of an identity"""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"


class Locale(str, Enum):
    """Preferred dashboard language"""

    EN = "EN"
    AR = "AR"


class InvitationStatus(str, Enum):
    """Invitation status; every value except PENDING is terminal"""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"


class TokenPurpose(str, Enum):
    """What a single-use token authorizes"""

    INVITATION = "INVITATION"
    RESET = "RESET"
    VERIFY = "VERIFY"
