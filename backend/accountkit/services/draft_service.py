import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from accountkit.core.exceptions import StoreError
from accountkit.core.keys import DRAFT_REGISTRATION_KEY
from accountkit.db.repositories import get_credential_store
from accountkit.db.store import CredentialStore, get_json, set_json
from accountkit.models.draft import RegistrationDraft

logger = logging.getLogger(__name__)


class RegistrationDraftService:
    """Auto-save for the registration form (one draft at a time)"""

    def __init__(self, store: CredentialStore):
        self.store = store

    async def save_draft_registration(self, data: Dict[str, Any]) -> bool:
        """Overwrite the draft with the current form data, minus passwords"""
        draft = RegistrationDraft.from_form(data, now=datetime.now(timezone.utc))
        try:
            await set_json(self.store, DRAFT_REGISTRATION_KEY, draft.to_dict())
        except StoreError as e:
            logger.error(f"Error saving draft registration: {e}")
            return False
        return True

    async def get_draft_registration(self) -> Optional[RegistrationDraft]:
        try:
            record = await get_json(self.store, DRAFT_REGISTRATION_KEY)
            return RegistrationDraft.from_dict(record) if record else None
        except (StoreError, ValueError, AttributeError) as e:
            logger.error(f"Error retrieving draft registration: {e}")
            return None

    async def clear_draft_registration(self) -> bool:
        try:
            await self.store.remove(DRAFT_REGISTRATION_KEY)
        except StoreError as e:
            logger.error(f"Error clearing draft registration: {e}")
            return False
        return True


# Singleton instance
_draft_service = None

def get_draft_service() -> RegistrationDraftService:
    """Get singleton RegistrationDraftService"""
    global _draft_service
    if _draft_service is None:
        _draft_service = RegistrationDraftService(get_credential_store())
    return _draft_service
