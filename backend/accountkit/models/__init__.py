from .user import User, CredentialPair, LegacyCredentials
from .auth_state import AuthState
from .draft import RegistrationDraft
from .results import AuthFailure, AuthResult, AuthStatus, BiometricResult
from .auth_models import RegistrationRequest, LoginRequest

__all__ = [
    "User",
    "CredentialPair",
    "LegacyCredentials",
    "AuthState",
    "RegistrationDraft",
    "AuthFailure",
    "AuthResult",
    "AuthStatus",
    "BiometricResult",
    "RegistrationRequest",
    "LoginRequest",
]
