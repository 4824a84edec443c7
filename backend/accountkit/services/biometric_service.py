import logging
from typing import Optional

from accountkit.core.exceptions import (
    BiometricCanceledError,
    BiometricError,
    BiometricUnavailableError,
    StoreError,
)
from accountkit.core.keys import BIOMETRIC_ENABLED_KEY
from accountkit.db.repositories import get_credential_store
from accountkit.db.store import CredentialStore
from accountkit.models.results import AuthFailure, BiometricResult
from accountkit.services.secure_storage import (
    AuthenticationPrompt,
    BiometryType,
    SecureCredentialSlot,
    get_secure_slot,
)

logger = logging.getLogger(__name__)

BIOMETRIC_DISPLAY_NAMES = {
    BiometryType.TOUCH_ID: "Touch ID",
    BiometryType.FACE_ID: "Face ID",
    BiometryType.FINGERPRINT: "Fingerprint",
    BiometryType.FACE: "Face Recognition",
    BiometryType.IRIS: "Iris Recognition",
}


class BiometricService:
    """Biometric quick-login over the secure credential slot"""

    def __init__(self, store: CredentialStore, slot: SecureCredentialSlot):
        self.store = store
        self.slot = slot

    async def is_biometric_available(self) -> bool:
        return await self.get_biometric_type() is not None

    async def get_biometric_type(self) -> Optional[BiometryType]:
        try:
            return await self.slot.supported_biometry()
        except BiometricError as e:
            logger.error(f"Error getting biometric type: {e}")
            return None

    async def is_biometric_enabled(self) -> bool:
        try:
            return await self.store.get(BIOMETRIC_ENABLED_KEY) == "true"
        except StoreError as e:
            logger.error(f"Error checking biometric enabled: {e}")
            return False

    async def enable_biometric(self, email: str, password: str) -> bool:
        """Store credentials behind the biometric gate and set the flag"""
        if not await self.is_biometric_available():
            return False

        try:
            await self.slot.store(email, password, biometric_gate=True)
            await self.store.set(BIOMETRIC_ENABLED_KEY, "true")
        except (StoreError, BiometricUnavailableError) as e:
            logger.error(f"Error enabling biometric: {e}", exc_info=True)
            return False

        logger.info(f"Biometric login enabled for {email}")
        return True

    async def disable_biometric(self) -> bool:
        try:
            await self.store.set(BIOMETRIC_ENABLED_KEY, "false")
        except StoreError as e:
            logger.error(f"Error disabling biometric: {e}", exc_info=True)
            return False
        return True

    async def authenticate_with_biometric(
        self, prompt: Optional[AuthenticationPrompt] = None
    ) -> BiometricResult:
        """Release the stored credentials after a biometric check"""
        if not await self.is_biometric_enabled():
            return BiometricResult(
                success=False,
                error="Biometric authentication not enabled",
                reason=AuthFailure.BIOMETRIC_NOT_ENABLED,
            )

        try:
            credentials = await self.slot.retrieve(prompt or AuthenticationPrompt())
        except BiometricCanceledError:
            return BiometricResult(
                success=False,
                error="Authentication canceled",
                reason=AuthFailure.BIOMETRIC_CANCELED,
            )
        except BiometricUnavailableError:
            return BiometricResult(
                success=False,
                error="Biometric authentication unavailable",
                reason=AuthFailure.BIOMETRIC_UNAVAILABLE,
            )
        except (BiometricError, StoreError) as e:
            logger.error(f"Error authenticating with biometric: {e}", exc_info=True)
            return BiometricResult(
                success=False,
                error="Biometric authentication failed",
                reason=AuthFailure.BIOMETRIC_FAILED,
            )

        if credentials:
            return BiometricResult(success=True, credentials=credentials)

        return BiometricResult(
            success=False,
            error="Authentication failed",
            reason=AuthFailure.BIOMETRIC_FAILED,
        )

    @staticmethod
    def get_biometric_display_name(biometry_type: Optional[BiometryType]) -> str:
        return BIOMETRIC_DISPLAY_NAMES.get(biometry_type, "Biometric")


# Singleton instance
_biometric_service = None

def get_biometric_service() -> BiometricService:
    """Get singleton BiometricService"""
    global _biometric_service
    if _biometric_service is None:
        _biometric_service = BiometricService(get_credential_store(), get_secure_slot())
    return _biometric_service
