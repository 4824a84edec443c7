from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from accountkit.core.security import verify_password


@dataclass
class User:
    """Registered account profile, keyed by email"""
    first_name: str
    last_name: str
    email: str
    phone_number: str
    country: str
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now().astimezone()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "country": self.country,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create User from a stored record"""
        created_at = data.get("createdAt")
        return cls(
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            email=data["email"],
            phone_number=data.get("phoneNumber", ""),
            country=data.get("country", ""),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


@dataclass
class CredentialPair:
    """Per-user credential record.

    New records carry a bcrypt ``password_hash``. Records written before
    hashing was introduced carry the plaintext ``password`` and are compared
    exactly.
    """
    email: str
    password_hash: Optional[str] = None
    password: Optional[str] = None

    def matches(self, email: str, password: str) -> bool:
        if self.email != email:
            return False
        if self.password_hash is not None:
            return verify_password(password, self.password_hash)
        return self.password is not None and self.password == password

    def to_dict(self) -> Dict[str, Any]:
        data = {"email": self.email}
        if self.password_hash is not None:
            data["passwordHash"] = self.password_hash
        else:
            data["password"] = self.password
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialPair":
        return cls(
            email=data.get("email", ""),
            password_hash=data.get("passwordHash"),
            password=data.get("password"),
        )


@dataclass
class LegacyCredentials:
    """Single-slot username/password pair held by the secure slot"""
    username: str
    password: str
