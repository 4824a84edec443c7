"""Database schema definitions"""

# Key-value records (auth state, profiles, credential pairs, drafts, flags)
KV_STORE_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,  -- JSON text
    updated_at DATETIME NOT NULL
)
"""

ALL_TABLES = [
    KV_STORE_TABLE,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_kv_store_updated ON kv_store(updated_at DESC)",
]
