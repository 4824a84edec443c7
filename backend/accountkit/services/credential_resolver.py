import logging
from typing import Optional

from accountkit.core.exceptions import BiometricError, StoreError
from accountkit.core.keys import credentials_key
from accountkit.db.store import CredentialStore, get_json
from accountkit.models.user import CredentialPair, LegacyCredentials
from accountkit.services.secure_storage import SecureCredentialSlot

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Two-tier credential lookup.

    Tier one is the per-email credential pair. Tier two is the single
    secure slot used by installations that predate per-user pairs; it is a
    migration shim and only answers for the email stored in the slot.
    Pass ``legacy_slot=None`` to disable it.
    """

    def __init__(
        self,
        store: CredentialStore,
        legacy_slot: Optional[SecureCredentialSlot] = None,
    ):
        self.store = store
        self.legacy_slot = legacy_slot

    async def get_user_credentials(self, email: str) -> Optional[CredentialPair]:
        """Get the per-email credential pair"""
        record = await get_json(self.store, credentials_key(email))
        if not record:
            return None
        if not isinstance(record, dict):
            raise StoreError(f"Corrupt credential record for {email}")
        return CredentialPair.from_dict(record)

    async def get_legacy_credentials(self, email: Optional[str] = None) -> Optional[LegacyCredentials]:
        """Get the single-slot pair, or None when absent or not releasable.

        With an email, the slot is only unlocked when it belongs to that
        email, so the biometric gate never runs for another account.
        """
        if self.legacy_slot is None:
            return None
        if email is not None and await self.legacy_slot.peek_username() != email:
            return None
        try:
            return await self.legacy_slot.retrieve()
        except BiometricError as e:
            logger.info(f"Legacy credential slot not released: {e}")
            return None

    async def verify(self, email: str, password: str) -> bool:
        """Check a password for an email. StoreError propagates."""
        credentials = await self.get_user_credentials(email)
        if credentials is not None:
            return credentials.matches(email, password)

        legacy = await self.get_legacy_credentials(email)
        if legacy is not None and legacy.username == email:
            logger.debug(f"Checking legacy single-slot credentials for {email}")
            return legacy.password == password

        return False
