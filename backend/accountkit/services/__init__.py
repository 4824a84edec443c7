from .auth_service import AuthService, get_auth_service
from .credential_resolver import CredentialResolver
from .secure_storage import (
    AuthenticationPrompt,
    BiometricAuthenticator,
    BiometryType,
    NoBiometrics,
    SecureCredentialSlot,
    get_secure_slot,
)
from .biometric_service import BiometricService, get_biometric_service
from .draft_service import RegistrationDraftService, get_draft_service

__all__ = [
    "AuthService",
    "get_auth_service",
    "CredentialResolver",
    "AuthenticationPrompt",
    "BiometricAuthenticator",
    "BiometryType",
    "NoBiometrics",
    "SecureCredentialSlot",
    "get_secure_slot",
    "BiometricService",
    "get_biometric_service",
    "RegistrationDraftService",
    "get_draft_service",
]
