import logging
from typing import Optional

from accountkit.core.config import settings
from accountkit.core.logging import configure_logging
from accountkit.db.database import get_db, init_db
from accountkit.services.auth_service import AuthService, get_auth_service
from accountkit.services.secure_storage import BiometricAuthenticator, get_secure_slot

logger = logging.getLogger(__name__)


async def startup(authenticator: Optional[BiometricAuthenticator] = None) -> AuthService:
    """Prepare logging, storage and the platform biometric gate"""
    configure_logging()
    await init_db()
    get_secure_slot(authenticator)
    logger.info(f"{settings.APP_NAME} {settings.VERSION} started")
    return get_auth_service()


async def shutdown():
    await get_db().disconnect()
