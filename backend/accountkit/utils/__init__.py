from .validation import (
    PasswordStrength,
    get_password_strength,
    validate_email,
    validate_name,
    validate_password,
    validate_phone,
)

__all__ = [
    "PasswordStrength",
    "get_password_strength",
    "validate_email",
    "validate_name",
    "validate_password",
    "validate_phone",
]
