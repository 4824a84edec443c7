from dataclasses import dataclass
from enum import Enum
from typing import Optional

from accountkit.models.user import LegacyCredentials, User


class AuthFailure(str, Enum):
    """Reasons an account operation can fail"""
    STORE_FAILURE = "store_failure"
    DUPLICATE_USER = "duplicate_user"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    USER_DATA_MISSING = "user_data_missing"
    BIOMETRIC_UNAVAILABLE = "biometric_unavailable"
    BIOMETRIC_NOT_ENABLED = "biometric_not_enabled"
    BIOMETRIC_FAILED = "biometric_failed"
    BIOMETRIC_CANCELED = "biometric_canceled"


@dataclass
class AuthResult:
    """Outcome of register, login and logout"""
    success: bool
    user: Optional[User] = None
    error: Optional[str] = None
    reason: Optional[AuthFailure] = None
    remaining_attempts: Optional[int] = None
    remaining_minutes: Optional[int] = None

    @classmethod
    def ok(cls, user: Optional[User] = None) -> "AuthResult":
        return cls(success=True, user=user)

    @classmethod
    def fail(cls, reason: AuthFailure, error: str, **details) -> "AuthResult":
        return cls(success=False, reason=reason, error=error, **details)


@dataclass
class AuthStatus:
    """Answer to "who is signed in" """
    authenticated: bool
    user: Optional[User] = None


@dataclass
class BiometricResult:
    """Outcome of a biometric unlock of the secure slot"""
    success: bool
    credentials: Optional[LegacyCredentials] = None
    error: Optional[str] = None
    reason: Optional[AuthFailure] = None
