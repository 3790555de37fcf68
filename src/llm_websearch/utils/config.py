import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def get_dotenv_path() -> Path:
    env_override = os.environ.get("LLM_WEBSEARCH_ENV_FILE")
    if env_override:
        return Path(env_override).expanduser().resolve()
    return Path.cwd() / ".env"


# Credentialed providers in auto-selection order, with the setting that
# enables each one.
CREDENTIAL_SETTINGS: dict[str, str] = {
    "tavily": "TAVILY_API_KEY",
    "exa": "EXA_API_KEY",
    "brave": "BRAVE_API_KEY",
    "firecrawl": "FIRECRAWL_API_KEY",
    "searxng": "SEARXNG_API_URL",
}


class SearchSettings(BaseSettings):
    # --- Provider Selection --- #
    SEARCH_API: Optional[str] = Field(
        default=None,
        description=(
            "Force a provider: 'tavily', 'exa', 'brave', 'firecrawl', 'searxng' or "
            "'duckduckgo'. Unset auto-selects based on available credentials."
        ),
    )

    # --- Credentials --- #
    TAVILY_API_KEY: str = Field(default="", description="Tavily API key (tavily.com)")
    EXA_API_KEY: str = Field(default="", description="Exa API key (exa.ai)")
    BRAVE_API_KEY: str = Field(default="", description="Brave Search API key")
    FIRECRAWL_API_KEY: str = Field(default="", description="Firecrawl API key")
    SEARXNG_API_URL: str = Field(default="", description="Base URL of a SearXNG instance with JSON output enabled")

    # --- Request Settings --- #
    SEARCH_TIMEOUT: float = Field(default=15.0, gt=0, description="Deadline in seconds for a single search call")
    SEARCH_MAX_RESULTS: int = Field(default=10, ge=1, description="Default maximum results per query")

    model_config = SettingsConfigDict(
        env_file=get_dotenv_path(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def credential_for(self, provider: Any) -> str:
        """Return the credential for a provider name or enum ('' if none needed or set)."""
        setting = CREDENTIAL_SETTINGS.get(getattr(provider, "value", provider))
        if setting is None:
            return ""
        return (getattr(self, setting, "") or "").strip()

    def configured_providers(self) -> list[str]:
        """Credentialed providers that have a credential, in selection order."""
        return [p for p in CREDENTIAL_SETTINGS if self.credential_for(p)]


@lru_cache(maxsize=1)
def get_settings() -> SearchSettings:
    """Load settings once per process (credentials don't change at runtime)."""
    settings = SearchSettings()
    logger.debug(
        "Loaded search settings: override=%s configured=%s",
        settings.SEARCH_API,
        settings.configured_providers(),
    )
    return settings
