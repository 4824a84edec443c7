from datetime import datetime, timedelta, timezone

import pytest

from accountkit.core.exceptions import BiometricCanceledError, StoreError
from accountkit.db.store import InMemoryCredentialStore
from accountkit.models.user import User
from accountkit.services.auth_service import AuthService
from accountkit.services.credential_resolver import CredentialResolver
from accountkit.services.secure_storage import BiometryType, SecureCredentialSlot


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class FailingStore(InMemoryCredentialStore):
    """In-memory store that raises StoreError for chosen keys"""

    def __init__(self):
        super().__init__()
        self.fail_get = set()
        self.fail_set = set()
        self.fail_remove = set()

    async def get(self, key):
        if any(key.startswith(prefix) for prefix in self.fail_get):
            raise StoreError(f"read failed: {key}")
        return await super().get(key)

    async def set(self, key, value):
        if any(key.startswith(prefix) for prefix in self.fail_set):
            raise StoreError(f"write failed: {key}")
        await super().set(key, value)

    async def remove(self, key):
        if any(key.startswith(prefix) for prefix in self.fail_remove):
            raise StoreError(f"remove failed: {key}")
        await super().remove(key)


class FakeBiometrics:
    def __init__(self, biometry=BiometryType.FACE_ID, verified=True, cancel=False):
        self.biometry = biometry
        self.verified = verified
        self.cancel = cancel
        self.prompts = []

    async def supported_biometry(self):
        return self.biometry

    async def authenticate(self, prompt):
        self.prompts.append(prompt)
        if self.cancel:
            raise BiometricCanceledError("User canceled the operation")
        return self.verified


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryCredentialStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def biometrics():
    return FakeBiometrics()


@pytest.fixture
def slot(store, biometrics):
    return SecureCredentialSlot(store, biometrics)


@pytest.fixture
def auth_service(store, slot, clock):
    return AuthService(
        store,
        CredentialResolver(store, slot),
        max_failed_attempts=5,
        lockout_minutes=15,
        bcrypt_rounds=4,
        clock=clock,
    )


@pytest.fixture
def profile():
    return User(
        first_name="Ada",
        last_name="Lovelace",
        email="a@x.com",
        phone_number="+14155550100",
        country="GB",
        created_at=datetime(2024, 4, 30, 18, 30, tzinfo=timezone.utc),
    )
