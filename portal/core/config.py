from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "creomotion-portal"

    # ---------------------------------------------------------------------
    # API contract / OpenAPI
    # ---------------------------------------------------------------------

    api_version: str = "1.0.0"
    api_description: str = (
        "Client review portal API.\n\n"
        "Deliverable versions, annotations, timeline comments and approval decisions. "
        "Write endpoints require a session token in the `auth-token` cookie "
        "(or an `Authorization: Bearer` header)."
    )

    env: str = "local"
    debug: bool = True
    log_level: str | None = None

    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_name: str = "portal"
    db_user: str = "portal"
    db_password: str = "portal"

    # Full URL override (tests point this at sqlite)
    database_url_override: str | None = Field(default=None, validation_alias="DATABASE_URL")

    # ---------------------------------------------------------------------
    # Session tokens
    # ---------------------------------------------------------------------

    jwt_secret: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    session_cookie_name: str = "auth-token"

    # ---------------------------------------------------------------------
    # Review workflow
    # ---------------------------------------------------------------------

    default_annotation_color: str = "#ff006e"
    version_conflict_retries: int = 3

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"


settings = Settings()
