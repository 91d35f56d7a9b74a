from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr


class Settings(BaseSettings):
    # Database
    db_url: str = Field("sqlite+aiosqlite:///./students.sqlite3", alias="DB_URL")

    # Token signing (no defaults: the app refuses to start without them)
    jwt_secret: SecretStr = Field(..., alias="JWT_SECRET")
    jwt_expiration_ms: int = Field(..., gt=0, alias="JWT_EXPIRATION_MS")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Optional first user, created on startup if missing
    bootstrap_username: str | None = Field(None, alias="BOOTSTRAP_USERNAME")
    bootstrap_password_hash: SecretStr | None = Field(None, alias="BOOTSTRAP_PASSWORD_HASH")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
