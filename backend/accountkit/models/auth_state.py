from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from accountkit.models.user import User


def to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


@dataclass
class AuthState:
    """Installation-wide sign-in and lockout record"""
    is_authenticated: bool = False
    user: Optional[User] = None
    failed_login_attempts: int = 0
    is_locked_out: bool = False
    lockout_until: Optional[datetime] = None

    def is_locked(self, now: datetime) -> bool:
        """Lockout holds strictly before lockout_until"""
        return (
            self.is_locked_out
            and self.lockout_until is not None
            and now < self.lockout_until
        )

    def remaining_lockout_ms(self, now: datetime) -> int:
        if self.lockout_until is None:
            return 0
        return max(0, to_epoch_ms(self.lockout_until) - to_epoch_ms(now))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage (lockoutUntil in epoch ms)"""
        return {
            "isAuthenticated": self.is_authenticated,
            "user": self.user.to_dict() if self.user else None,
            "failedLoginAttempts": self.failed_login_attempts,
            "isLockedOut": self.is_locked_out,
            "lockoutUntil": to_epoch_ms(self.lockout_until) if self.lockout_until else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthState":
        """Create AuthState from a stored record"""
        user = data.get("user")
        lockout_until = data.get("lockoutUntil")
        return cls(
            is_authenticated=bool(data.get("isAuthenticated", False)),
            user=User.from_dict(user) if user else None,
            failed_login_attempts=int(data.get("failedLoginAttempts") or 0),
            is_locked_out=bool(data.get("isLockedOut", False)),
            lockout_until=from_epoch_ms(lockout_until) if lockout_until is not None else None,
        )
