"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")

DEFAULT_SECRET_KEY = "change-this-secret-key-in-production"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
        populate_by_name=True,
    )

    # ===== Database Configuration =====
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="Application database URL (postgresql://, mysql:// or sqlite+aiosqlite://)",
    )

    db_pool_size: int = Field(
        default=10,
        alias="DB_POOL_SIZE",
        description="Maximum number of pooled database connections",
    )

    db_pool_timeout: float = Field(
        default=30.0,
        alias="DB_POOL_TIMEOUT",
        description="Seconds a request waits for a free pooled connection",
    )

    db_command_timeout: float = Field(
        default=15.0,
        alias="DB_COMMAND_TIMEOUT",
        description="Per-statement timeout in seconds against the database",
    )

    db_echo: bool = Field(
        default=False, alias="DB_ECHO", description="Echo SQL statements to the log"
    )

    # ===== Authentication Configuration =====
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        alias="SECRET_KEY",
        description="Key used to sign JWT access tokens",
    )

    access_token_expire_minutes: int = Field(
        default=1440,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="JWT access token lifetime in minutes",
    )

    bcrypt_rounds: int = Field(
        default=10,
        alias="BCRYPT_ROUNDS",
        description="bcrypt work factor used when hashing passwords",
    )

    enforce_password_policy: bool = Field(
        default=True,
        alias="ENFORCE_PASSWORD_POLICY",
        description="Require lower, upper, digit and symbol in new passwords",
    )

    admin_api_key: str | None = Field(
        default=None,
        alias="ADMIN_API_KEY",
        description="Key required in X-Admin-Key for manual score adjustments",
    )

    # ===== Email Configuration =====
    email_provider: str = Field(
        default="console",
        alias="EMAIL_PROVIDER",
        description="Email transport to use (console, smtp)",
    )

    email_from: str = Field(
        default="no-reply@cybermaker.local",
        alias="EMAIL_FROM",
        description="Sender address for outgoing emails",
    )

    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_use_ssl: bool = Field(default=False, alias="SMTP_USE_SSL")
    smtp_timeout: float = Field(default=15.0, alias="SMTP_TIMEOUT")

    # ===== Public URLs =====
    frontend_url: str = Field(
        default="http://localhost:3000",
        alias="FRONTEND_URL",
        description="Base URL of the web client, used for post-confirmation redirects",
    )

    public_api_url: str = Field(
        default="http://localhost:3000",
        alias="PUBLIC_API_URL",
        description="Externally reachable base URL of this API, used in confirmation links",
    )

    # ===== Gamification Configuration =====
    points_challenge_submission: int = Field(
        default=1000,
        alias="POINTS_CHALLENGE_SUBMISSION",
        description="Points awarded for each challenge submission",
    )

    points_community_post: int = Field(
        default=10,
        alias="POINTS_COMMUNITY_POST",
        description="Points awarded for each community post",
    )

    points_conclusion: int = Field(
        default=30,
        alias="POINTS_CONCLUSION",
        description="Points awarded to an idea owner when the idea is concluded",
    )

    points_journal_post: int = Field(
        default=0,
        alias="POINTS_JOURNAL_POST",
        description="Points awarded for each journal post",
    )

    allow_duplicate_submissions: bool = Field(
        default=True,
        alias="ALLOW_DUPLICATE_SUBMISSIONS",
        description="Whether a user may submit to the same challenge more than once",
    )

    ranking_default_limit: int = Field(
        default=50,
        alias="RANKING_DEFAULT_LIMIT",
        description="Number of ranking rows returned when no limit is given",
    )

    # ===== File Storage =====
    upload_dir: str = Field(
        default="uploads",
        alias="UPLOAD_DIR",
        description="Directory where processed avatars and images are written",
    )

    static_dir: str | None = Field(
        default=None,
        alias="STATIC_DIR",
        description="Directory holding the web client; index.html is the SPA fallback",
    )

    max_image_bytes: int = Field(
        default=5 * 1024 * 1024,
        alias="MAX_IMAGE_BYTES",
        description="Maximum decoded size of an uploaded image",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=3000, alias="PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=False,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if not self.database_url:
            logger.warning("DATABASE_URL environment variable not set.")

        if self.secret_key == DEFAULT_SECRET_KEY:
            logger.warning("SECRET_KEY is using the built-in default value.")

        if self.bcrypt_rounds < 10:
            logger.warning(
                f"BCRYPT_ROUNDS={self.bcrypt_rounds} is below the recommended work factor of 10."
            )

        if self.email_provider == "smtp" and not self.smtp_host:
            logger.warning("EMAIL_PROVIDER is 'smtp' but SMTP_HOST is not set.")

        logger.debug(
            f"Duplicate challenge submissions allowed: {self.allow_duplicate_submissions}"
        )

        return self


# Global settings instance
settings = Settings()
