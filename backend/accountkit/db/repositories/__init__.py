from .key_value_repository import KeyValueRepository, get_credential_store

__all__ = [
    "KeyValueRepository",
    "get_credential_store",
]
