"""
Custom exceptions for the account core
"""


class AccountKitError(Exception):
    """Base exception for account services"""
    pass


class StoreError(AccountKitError):
    """Raised when a Credential Store read, write or remove fails"""
    pass


class BiometricError(AccountKitError):
    """Base exception for biometric gate failures"""
    pass


class BiometricUnavailableError(BiometricError):
    """Raised when the device reports no supported biometry"""
    pass


class BiometricFailedError(BiometricError):
    """Raised when biometric verification is rejected"""
    pass


class BiometricCanceledError(BiometricError):
    """Raised when the user cancels the biometric prompt"""
    pass
