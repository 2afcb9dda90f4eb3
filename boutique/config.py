# boutique/config.py
import os
from typing import Annotated, List, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


def _default_database_url() -> str:
    return (
        f"postgresql+asyncpg://{os.getenv('DB_USER', 'postgres')}:{os.getenv('DB_PASSWORD', 'postgres')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME', 'boutique')}"
    )


class Settings(BaseSettings):
    """
    Application settings, read from environment variables of the same name
    (JWT_SECRET, DATABASE_URL, CORS_ORIGINS, ...).
    """

    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True)

    jwt_secret: str = Field(..., min_length=1)
    database_url: str = Field(default_factory=_default_database_url)
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = Field(7, ge=1)
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    api_prefix: str = "/api"
    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    log_level: str = "INFO"
    db_echo: bool = False
    seed_demo_data: bool = False
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        # comma separated in the environment
        if isinstance(value, str):
            value = [o.strip() for o in value.split(",") if o.strip()]
        return value or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            return cls()
        except ValidationError as exc:
            names = sorted({str(err["loc"][0]).upper() for err in exc.errors() if err["loc"]})
            if "JWT_SECRET" in names:
                raise ConfigurationError(
                    "JWT_SECRET is not set; refusing to start without a token signing secret"
                ) from exc
            raise ConfigurationError(f"Invalid configuration for {', '.join(names)}") from exc
