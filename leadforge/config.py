"""
Application settings loaded from environment variables / .env.

Build one ``Settings`` at startup and pass it to the components that need it.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Settings(BaseSettings):
    # Google Custom Search
    google_api_key: str = ""
    google_cx: str = ""
    search_backend: Literal["google", "duckduckgo"] = "google"
    search_timeout_s: float = 15.0

    # Gemini (through the OpenAI-compatible endpoint)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = GEMINI_OPENAI_BASE_URL
    enable_enrichment: bool = True

    # Brevo transactional email
    brevo_api_key: str = ""

    # Delays between provider calls (seconds)
    page_delay_s: float = Field(default=1.0, ge=0)
    query_delay_s: float = Field(default=1.5, ge=0)
    platform_delay_s: float = Field(default=1.0, ge=0)
    enrichment_delay_s: float = Field(default=0.8, ge=0)
    email_delay_s: float = Field(default=0.1, ge=0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def enrichment_available(self) -> bool:
        return bool(self.enable_enrichment and self.gemini_api_key)

    def require_search_credentials(self) -> None:
        if self.search_backend != "google":
            return
        if not self.google_api_key:
            raise ConfigurationError("Google API key is missing. Set GOOGLE_API_KEY.")
        if not self.google_cx:
            raise ConfigurationError("Google search engine id is missing. Set GOOGLE_CX.")

    def require_brevo_credentials(self) -> None:
        if not self.brevo_api_key:
            raise ConfigurationError("Brevo API key is missing. Set BREVO_API_KEY.")
