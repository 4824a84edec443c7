"""Password hashing helpers"""

from typing import Optional

import bcrypt

from accountkit.core.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash password using bcrypt"""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash"""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # Malformed hash
        return False
