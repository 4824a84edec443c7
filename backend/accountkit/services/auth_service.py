import asyncio
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from accountkit.core.config import settings
from accountkit.core.exceptions import StoreError
from accountkit.core.keys import (
    AUTH_STATE_KEY,
    REGISTERED_USERS_KEY,
    credentials_key,
    user_key,
)
from accountkit.core.security import hash_password
from accountkit.db.repositories import get_credential_store
from accountkit.db.store import CredentialStore, get_json, set_json
from accountkit.models.auth_state import AuthState
from accountkit.models.results import AuthFailure, AuthResult, AuthStatus
from accountkit.models.user import CredentialPair, User
from accountkit.services.credential_resolver import CredentialResolver
from accountkit.services.secure_storage import get_secure_slot

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """Registration, login with lockout accounting, logout and status.

    The auth state is a single record per installation, so the failed-attempt
    counter is shared by every account on the device. Each read-modify-write
    of that record runs under the service lock.
    """

    def __init__(
        self,
        store: CredentialStore,
        resolver: Optional[CredentialResolver] = None,
        *,
        max_failed_attempts: Optional[int] = None,
        lockout_minutes: Optional[int] = None,
        hash_passwords: Optional[bool] = None,
        bcrypt_rounds: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.resolver = resolver or CredentialResolver(store)
        self.max_failed_attempts = max_failed_attempts or settings.MAX_FAILED_LOGIN_ATTEMPTS
        self.lockout_minutes = lockout_minutes or settings.LOCKOUT_DURATION_MINUTES
        self.hash_passwords = settings.HASH_PASSWORDS if hash_passwords is None else hash_passwords
        self.bcrypt_rounds = bcrypt_rounds or settings.BCRYPT_ROUNDS
        self.clock = clock or utc_now
        self._lock = asyncio.Lock()

    # Records

    async def get_registered_users(self) -> List[str]:
        """Emails of every completed registration"""
        users = await get_json(self.store, REGISTERED_USERS_KEY)
        if not users:
            return []
        if not isinstance(users, list):
            raise StoreError("Corrupt registered users index")
        return list(users)

    async def get_user_data(self, email: str) -> Optional[User]:
        record = await get_json(self.store, user_key(email))
        if not record:
            return None
        if not isinstance(record, dict):
            raise StoreError(f"Corrupt profile record for {email}")
        try:
            return User.from_dict(record)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreError(f"Corrupt profile record for {email}: {e}") from e

    async def get_auth_state(self) -> Optional[AuthState]:
        record = await get_json(self.store, AUTH_STATE_KEY)
        if not record:
            return None
        if not isinstance(record, dict):
            raise StoreError("Corrupt auth state record")
        try:
            return AuthState.from_dict(record)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreError(f"Corrupt auth state record: {e}") from e

    async def store_auth_state(self, auth_state: AuthState) -> None:
        await set_json(self.store, AUTH_STATE_KEY, auth_state.to_dict())

    def _make_credential_pair(self, email: str, password: str) -> CredentialPair:
        if self.hash_passwords:
            return CredentialPair(email=email, password_hash=hash_password(password, self.bcrypt_rounds))
        return CredentialPair(email=email, password=password)

    # Operations

    async def verify_credentials(self, email: str, password: str) -> bool:
        """Check credentials without touching the auth state"""
        try:
            return await self.resolver.verify(email, password)
        except StoreError as e:
            logger.error(f"Error verifying credentials: {e}", exc_info=True)
            return False

    async def register(self, email: str, password: str, user: User) -> AuthResult:
        """Register a new account.

        Writes the profile, then the credential pair, then the registered
        users index. A failure part way through is reported as a store
        failure and earlier writes are left in place.
        """
        async with self._lock:
            try:
                registered_users = await self.get_registered_users()
            except StoreError as e:
                logger.error(f"Error reading registered users: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Registration failed")

            if email in registered_users:
                return AuthResult.fail(AuthFailure.DUPLICATE_USER, "User already exists")

            try:
                await set_json(self.store, user_key(email), user.to_dict())
            except StoreError as e:
                logger.error(f"Error storing user data: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Failed to store user data")

            try:
                pair = self._make_credential_pair(email, password)
                await set_json(self.store, credentials_key(email), pair.to_dict())
            except StoreError as e:
                logger.error(f"Error storing credentials for {email}: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Failed to store credentials")

            try:
                registered_users.append(email)
                await set_json(self.store, REGISTERED_USERS_KEY, registered_users)
            except StoreError as e:
                logger.error(f"Error updating registered users: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Failed to update registered users")

        logger.info(f"Registered user {email}")
        return AuthResult.ok(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Log in with email and password, enforcing the lockout window"""
        async with self._lock:
            try:
                return await self._login(email, password)
            except StoreError as e:
                logger.error(f"Error during login: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Login failed")

    async def _login(self, email: str, password: str) -> AuthResult:
        auth_state = await self.get_auth_state()
        now = self.clock()

        if auth_state and auth_state.is_locked(now):
            remaining_minutes = math.ceil(auth_state.remaining_lockout_ms(now) / 60000)
            return AuthResult.fail(
                AuthFailure.ACCOUNT_LOCKED,
                f"Account locked. Try again in {remaining_minutes} minute(s)",
                remaining_minutes=remaining_minutes,
            )

        if not await self.resolver.verify(email, password):
            failed_attempts = (auth_state.failed_login_attempts if auth_state else 0) + 1
            is_locked_out = failed_attempts >= self.max_failed_attempts
            lockout_until = now + timedelta(minutes=self.lockout_minutes) if is_locked_out else None

            await self.store_auth_state(AuthState(
                is_authenticated=False,
                user=None,
                failed_login_attempts=failed_attempts,
                is_locked_out=is_locked_out,
                lockout_until=lockout_until,
            ))

            if is_locked_out:
                logger.warning(f"Login locked for {self.lockout_minutes} minutes after {failed_attempts} failed attempts")
                return AuthResult.fail(
                    AuthFailure.ACCOUNT_LOCKED,
                    f"Too many failed attempts. Account locked for {self.lockout_minutes} minutes",
                    remaining_attempts=0,
                    remaining_minutes=self.lockout_minutes,
                )

            remaining = self.max_failed_attempts - failed_attempts
            return AuthResult.fail(
                AuthFailure.INVALID_CREDENTIALS,
                f"Invalid credentials. {remaining} attempt(s) remaining",
                remaining_attempts=remaining,
            )

        user = await self.get_user_data(email)
        if not user:
            logger.error(f"Credentials exist for {email} but profile is missing")
            return AuthResult.fail(AuthFailure.USER_DATA_MISSING, "User data not found")

        await self.store_auth_state(AuthState(
            is_authenticated=True,
            user=user,
            failed_login_attempts=0,
            is_locked_out=False,
            lockout_until=None,
        ))

        logger.info(f"User {email} logged in")
        return AuthResult.ok(user)

    async def login_with_biometrics(self, biometric_service) -> AuthResult:
        """Unlock the secure slot with biometrics, then log in with its pair"""
        result = await biometric_service.authenticate_with_biometric()
        if not result.success:
            return AuthResult.fail(result.reason, result.error)

        return await self.login(result.credentials.username, result.credentials.password)

    async def logout(self) -> AuthResult:
        """Clear the auth state. Profiles and credential pairs are kept."""
        async with self._lock:
            try:
                await self.store.remove(AUTH_STATE_KEY)
            except StoreError as e:
                logger.error(f"Error during logout: {e}", exc_info=True)
                return AuthResult.fail(AuthFailure.STORE_FAILURE, "Logout failed")

        logger.info("User logged out")
        return AuthResult.ok()

    async def is_authenticated(self) -> AuthStatus:
        try:
            auth_state = await self.get_auth_state()
        except StoreError as e:
            logger.error(f"Error checking authentication: {e}", exc_info=True)
            return AuthStatus(authenticated=False)

        if auth_state and auth_state.is_authenticated and auth_state.user:
            return AuthStatus(authenticated=True, user=auth_state.user)
        return AuthStatus(authenticated=False)


# Singleton instance
_auth_service = None

def get_auth_service() -> AuthService:
    """Get singleton AuthService bound to the SQLite store"""
    global _auth_service
    if _auth_service is None:
        store = get_credential_store()
        legacy_slot = get_secure_slot() if settings.LEGACY_CREDENTIAL_FALLBACK else None
        _auth_service = AuthService(store, CredentialResolver(store, legacy_slot))
    return _auth_service
