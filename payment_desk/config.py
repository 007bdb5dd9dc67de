"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./payment_desk.db"
    seed_demo_data: bool = False

    # Service
    service_name: str = "payment-desk"
    log_level: str = "INFO"
    environment: str = "development"

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    session_ttl_hours: int = 8
    session_cookie_name: str = "session"

    # Route protection
    protected_prefix: str = "/dashboard"
    login_path: str = "/login"

    # Operator identities (bcrypt hashes, never plaintext)
    admin_email: str = ""
    admin_password_hash: str = ""
    loader_email: str = ""
    loader_password_hash: str = ""

    @property
    def cookie_secure(self) -> bool:
        return self.environment == "production"

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_ttl_hours * 60 * 60


settings = Settings()
