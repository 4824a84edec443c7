"""Keychain-equivalent single-slot credential storage.

One username/password pair lives under ``@secure_credentials``. When it is
written with ``biometric_gate=True`` the slot releases it only after the
device's :class:`BiometricAuthenticator` accepts a prompt.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from accountkit.core.exceptions import (
    BiometricFailedError,
    BiometricUnavailableError,
    StoreError,
)
from accountkit.core.keys import SECURE_CREDENTIALS_KEY
from accountkit.db.repositories import get_credential_store
from accountkit.db.store import CredentialStore, get_json, set_json
from accountkit.models.user import LegacyCredentials

logger = logging.getLogger(__name__)


class BiometryType(str, Enum):
    """Biometric modalities reported by the platform"""
    TOUCH_ID = "TouchID"
    FACE_ID = "FaceID"
    FINGERPRINT = "Fingerprint"
    FACE = "Face"
    IRIS = "Iris"


@dataclass
class AuthenticationPrompt:
    title: str = "Authenticate"
    subtitle: str = "Use biometrics to login"
    description: str = "Place your finger on the sensor or look at the camera"
    cancel: str = "Cancel"


class BiometricAuthenticator(Protocol):
    """Platform biometric gate"""

    async def supported_biometry(self) -> Optional[BiometryType]:
        ...

    async def authenticate(self, prompt: AuthenticationPrompt) -> bool:
        """Return True when verified; raise BiometricCanceledError on user cancel."""
        ...


class NoBiometrics:
    """Authenticator for hosts without biometric hardware"""

    async def supported_biometry(self) -> Optional[BiometryType]:
        return None

    async def authenticate(self, prompt: AuthenticationPrompt) -> bool:
        raise BiometricUnavailableError("No biometric hardware available")


class SecureCredentialSlot:
    """Single global credential slot with an optional biometric gate"""

    def __init__(
        self,
        store: CredentialStore,
        authenticator: Optional[BiometricAuthenticator] = None,
    ):
        self._store = store
        self.authenticator = authenticator or NoBiometrics()

    async def supported_biometry(self) -> Optional[BiometryType]:
        return await self.authenticator.supported_biometry()

    async def store(self, username: str, password: str, biometric_gate: bool = False) -> None:
        """Write the slot, replacing any previous pair"""
        if biometric_gate and await self.supported_biometry() is None:
            raise BiometricUnavailableError("Biometric gate requested but unavailable")

        await set_json(self._store, SECURE_CREDENTIALS_KEY, {
            "username": username,
            "password": password,
            "biometricGate": biometric_gate,
        })

    async def _load_record(self) -> Optional[dict]:
        record = await get_json(self._store, SECURE_CREDENTIALS_KEY)
        if not record:
            return None
        if not isinstance(record, dict) or "username" not in record or "password" not in record:
            raise StoreError("Corrupt secure credential record")
        return record

    async def peek_username(self) -> Optional[str]:
        """Username held by the slot, read without the biometric gate"""
        record = await self._load_record()
        return record["username"] if record else None

    async def retrieve(self, prompt: Optional[AuthenticationPrompt] = None) -> Optional[LegacyCredentials]:
        """Read the slot, running the biometric gate when the pair is gated"""
        record = await self._load_record()
        if not record:
            return None

        credentials = LegacyCredentials(
            username=record["username"],
            password=record["password"],
        )

        if record.get("biometricGate"):
            verified = await self.authenticator.authenticate(prompt or AuthenticationPrompt())
            if not verified:
                raise BiometricFailedError("Biometric verification failed")

        return credentials

    async def clear(self) -> None:
        await self._store.remove(SECURE_CREDENTIALS_KEY)


# Singleton instance
_secure_slot = None

def get_secure_slot(authenticator: Optional[BiometricAuthenticator] = None) -> SecureCredentialSlot:
    """Get singleton SecureCredentialSlot; a passed authenticator replaces the current one"""
    global _secure_slot
    if _secure_slot is None:
        _secure_slot = SecureCredentialSlot(get_credential_store(), authenticator)
    elif authenticator is not None:
        _secure_slot.authenticator = authenticator
    return _secure_slot
