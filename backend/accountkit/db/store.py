"""Credential Store contract and the in-memory adapter.

Every record the account core persists (auth state, profiles, credential
pairs, the secure slot, drafts, flags) goes through this small async
key-value interface. Reads distinguish "absent" (``None``) from failure
(:class:`StoreError`). No atomicity is offered across keys.
"""

import json
from typing import Any, Dict, List, Optional, Protocol

from accountkit.core.exceptions import StoreError


class CredentialStore(Protocol):
    """Async key-value storage for string values."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def remove(self, key: str) -> None:
        ...


async def get_json(store: CredentialStore, key: str) -> Any:
    """Read and decode a JSON record. Returns None when the key is absent."""
    raw = await store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StoreError(f"Corrupt record at {key}: {e}") from e


async def set_json(store: CredentialStore, key: str, value: Any) -> None:
    """Encode a value as JSON and write it."""
    await store.set(key, json.dumps(value))


class InMemoryCredentialStore:
    """Volatile dict-backed store for tests and ephemeral installations"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def snapshot(self) -> Dict[str, str]:
        """Copy of the raw records"""
        return dict(self._data)
