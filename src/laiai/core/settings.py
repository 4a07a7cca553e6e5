from __future__ import annotations

from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """
    App settings.

    Loads from environment variables and an optional local `.env` file.
    `.env` is gitignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    API_TITLE: str = "LAI AI API"
    API_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Database (Docker Compose). LAIAI_DATABASE_URL wins when set.
    LAIAI_DATABASE_URL: str | None = None
    LAIAI_DB_HOST: str = "localhost"
    LAIAI_DB_PORT: int = 5432
    LAIAI_DB_NAME: str = "laiai"
    LAIAI_DB_USER: str = "laiai"
    LAIAI_DB_PASSWORD: str = "laiai"
    LAIAI_DB_ECHO: bool = False

    # Completion service (Gemini). The server secret comes first; the public
    # client-side variants are accepted as fallbacks.
    GEMINI_API_KEY: str | None = None
    NEXT_PUBLIC_GEMINI_API_KEY: str | None = None
    NEXT_PUBLIC_GOOGLE_API_KEY: str | None = None
    GOOGLE_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.9

    # Auth (sessions are issued by the external auth provider)
    AUTH_COOKIE_NAME: str = "laiai_session"

    # Client side
    CHAT_TIMEOUT_S: float = 30.0
    TITLE_MAX_CHARS: int = 50
    LOCAL_STORAGE_DIR: str = "~/.laiai"

    # CORS (browser UI on :3000 calling the API on :8000 with cookies)
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def completion_api_key(self) -> str | None:
        for candidate in (
            self.GEMINI_API_KEY,
            self.NEXT_PUBLIC_GEMINI_API_KEY,
            self.NEXT_PUBLIC_GOOGLE_API_KEY,
            self.GOOGLE_API_KEY,
        ):
            if candidate and candidate.strip():
                return candidate.strip()
        return None

    @property
    def completion_configured(self) -> bool:
        return self.completion_api_key is not None


settings = Settings()
