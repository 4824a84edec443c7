from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from accountkit.models.user import User
from accountkit.utils.validation import (
    validate_email,
    validate_name,
    validate_password,
    validate_phone,
)


def _check(error: Optional[str], value: str) -> str:
    if error:
        raise ValueError(error)
    return value


class RegistrationRequest(BaseModel):
    """Request model for account registration"""
    first_name: str = Field(..., description="User's first name")
    last_name: str = Field(..., description="User's last name")
    email: str = Field(..., description="Email address, also the account identifier")
    phone_number: str = Field(..., description="Phone number in international format")
    country: str = Field(..., min_length=2, description="Country code")
    password: str = Field(..., description="Account password")
    confirm_password: str = Field(..., description="Password confirmation")
    agree_to_terms: bool = Field(..., description="Terms and conditions accepted")

    @field_validator('first_name')
    @classmethod
    def check_first_name(cls, v):
        return _check(validate_name(v.strip(), "First name"), v.strip())

    @field_validator('last_name')
    @classmethod
    def check_last_name(cls, v):
        return _check(validate_name(v.strip(), "Last name"), v.strip())

    @field_validator('email')
    @classmethod
    def check_email(cls, v):
        return _check(validate_email(v.strip()), v.strip())

    @field_validator('phone_number')
    @classmethod
    def check_phone_number(cls, v):
        return _check(validate_phone(v.strip()), v.strip())

    @field_validator('password')
    @classmethod
    def check_password(cls, v):
        return _check(validate_password(v), v)

    @field_validator('agree_to_terms')
    @classmethod
    def check_terms(cls, v):
        if not v:
            raise ValueError('You must agree to the terms and conditions')
        return v

    @model_validator(mode='after')
    def check_passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError('Passwords must match')
        return self

    def to_user(self, now: Optional[datetime] = None) -> User:
        """Build the profile stored at registration"""
        return User(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone_number=self.phone_number,
            country=self.country,
            created_at=now or datetime.now().astimezone(),
        )


class LoginRequest(BaseModel):
    """Request model for login"""
    email_or_username: str = Field(..., min_length=3, description="Email or username")
    password: str = Field(..., min_length=6, description="Account password")

    @field_validator('email_or_username')
    @classmethod
    def check_identifier(cls, v):
        return v.strip()
