from .database import Database, db, get_db, init_db
from .repositories import KeyValueRepository, get_credential_store
from .store import CredentialStore, InMemoryCredentialStore, get_json, set_json

__all__ = [
    "Database",
    "db",
    "get_db",
    "init_db",
    "KeyValueRepository",
    "get_credential_store",
    "CredentialStore",
    "InMemoryCredentialStore",
    "get_json",
    "set_json",
]
