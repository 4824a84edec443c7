"""Record keys used in the Credential Store"""

AUTH_STATE_KEY = "@auth_state"
REGISTERED_USERS_KEY = "@registered_users"
SECURE_CREDENTIALS_KEY = "@secure_credentials"
DRAFT_REGISTRATION_KEY = "@draft_registration"
BIOMETRIC_ENABLED_KEY = "@biometric_enabled"

USER_KEY_PREFIX = "@user_"
CREDENTIALS_KEY_PREFIX = "@credentials_"


def user_key(email: str) -> str:
    return f"{USER_KEY_PREFIX}{email}"


def credentials_key(email: str) -> str:
    return f"{CREDENTIALS_KEY_PREFIX}{email}"
