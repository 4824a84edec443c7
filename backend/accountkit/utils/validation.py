"""Registration and login field rules"""

import re
from dataclasses import dataclass
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
PHONE_PATTERN = re.compile(
    r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$"
)
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")

PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 15
PASSWORD_MIN_LENGTH = 8


def validate_email(value: str) -> Optional[str]:
    """Return an error message, or None when the email is acceptable"""
    if not value:
        return "Email is required"
    if not EMAIL_PATTERN.match(value):
        return "Please enter a valid email address"
    return None


def validate_phone(value: str) -> Optional[str]:
    if not value:
        return "Phone number is required"
    if not PHONE_PATTERN.match(value):
        return "Please enter a valid phone number"
    if len(value) < PHONE_MIN_LENGTH:
        return "Phone number must be at least 10 digits"
    if len(value) > PHONE_MAX_LENGTH:
        return "Phone number must not exceed 15 digits"
    return None


def validate_password(value: str) -> Optional[str]:
    if not value:
        return "Password is required"
    if len(value) < PASSWORD_MIN_LENGTH:
        return "Password must be at least 8 characters"
    if not PASSWORD_PATTERN.match(value):
        return (
            "Password must contain at least one uppercase letter, one lowercase "
            "letter, one number, and one special character"
        )
    return None


def validate_name(value: str, label: str) -> Optional[str]:
    if not value:
        return f"{label} is required"
    if len(value) < 2:
        return f"{label} must be at least 2 characters"
    if len(value) > 50:
        return f"{label} must not exceed 50 characters"
    if not NAME_PATTERN.match(value):
        return f"{label} can only contain letters"
    return None


@dataclass
class PasswordStrength:
    strength: int
    label: str


def get_password_strength(password: str) -> PasswordStrength:
    """Score a password from 0 to 6 and label it Weak, Medium or Strong"""
    checks = [
        len(password) >= 8,
        len(password) >= 12,
        re.search(r"[a-z]", password) is not None,
        re.search(r"[A-Z]", password) is not None,
        re.search(r"\d", password) is not None,
        re.search(r"[@$!%*?&]", password) is not None,
    ]
    strength = sum(checks)

    if strength <= 2:
        return PasswordStrength(strength, "Weak")
    if strength <= 4:
        return PasswordStrength(strength, "Medium")
    return PasswordStrength(strength, "Strong")
