from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "AccountKit"
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/accountkit.db"

    # Login lockout
    MAX_FAILED_LOGIN_ATTEMPTS: int = 5
    LOCKOUT_DURATION_MINUTES: int = 15

    # Credential storage
    HASH_PASSWORDS: bool = True
    BCRYPT_ROUNDS: int = 12
    LEGACY_CREDENTIAL_FALLBACK: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ACCOUNTKIT_",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def database_path(self) -> str:
        return self.DATABASE_URL.replace("sqlite+aiosqlite:///", "")


settings = Settings()
