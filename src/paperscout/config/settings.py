"""Settings for paperscout.

Each section reads ``PAPERSCOUT_<SECTION>_<FIELD>`` environment variables and
a ``.env`` file in the working directory, falling back to the defaults below.
Provider API keys are also read from their conventional variables.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from paperscout.core.exceptions import ConfigurationError
from paperscout.core.models import SearchCriteria

logger = logging.getLogger(__name__)

ENV_PREFIX = "PAPERSCOUT_"


def _section_config(section: str, **extra: Any) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=f"{ENV_PREFIX}{section.upper()}_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        **extra,
    )


class SearchConfig(BaseSettings):
    """Search criteria defaults and the results ceiling."""

    model_config = _section_config("search")

    topic: str = "large language models"
    year: str = "2024"
    max_results: int = Field(default=4, ge=1)
    max_abstract_length: int = Field(default=300, ge=0)
    subject: str = "computer_science"
    search_field: str = "title"
    results_ceiling: int = Field(default=50, ge=1)

    def criteria(self) -> SearchCriteria:
        """SearchCriteria for this config, capped at the results ceiling."""
        return SearchCriteria(
            topic=self.topic,
            year=self.year,
            max_results=self.max_results,
            max_abstract_length=self.max_abstract_length,
            subject=self.subject,
            search_field=self.search_field,
        ).capped(self.results_ceiling)


class BrowserConfig(BaseSettings):
    """Browser session settings."""

    model_config = _section_config("browser")

    browser: str = "firefox"
    headless: bool = True
    # Remote browser (e.g. a hosted session) reached over CDP; local launch when empty
    cdp_url: str | None = None
    navigation_timeout: int = 60000
    dom_settle_timeout: int = 30000
    lookup_timeout: int = 5000
    viewport_width: int = 1024
    viewport_height: int = 768
    screenshot_path: str | None = "arxiv-search-results.png"


class RetryConfig(BaseModel):
    """Retry policy for LLM requests."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_factor: float = 2.0


class LLMConfig(BaseSettings):
    """LLM provider used for instruction-driven extraction.

    ``api_key`` comes from ``PAPERSCOUT_LLM_API_KEY``; when that is unset the
    selected provider's own variable (``CEREBRAS_API_KEY`` or
    ``OPENROUTER_API_KEY``) is used.
    """

    model_config = _section_config("llm", env_nested_delimiter="__", populate_by_name=True)

    provider: str = "cerebras"
    model: str = "llama-3.3-70b"
    api_key: str = ""
    cerebras_api_key: str = Field(
        default="",
        validation_alias="CEREBRAS_API_KEY",
        exclude=True,
        repr=False,
    )
    openrouter_api_key: str = Field(
        default="",
        validation_alias="OPENROUTER_API_KEY",
        exclude=True,
        repr=False,
    )
    timeout: float = 60.0
    max_html_chars: int = 15000
    max_tokens: int = 1024
    temperature: float = 0.1
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @model_validator(mode="after")
    def _fill_provider_key(self) -> "LLMConfig":
        if not self.api_key:
            provider_keys = {"cerebras": self.cerebras_api_key, "openrouter": self.openrouter_api_key}
            self.api_key = provider_keys.get(self.provider.lower(), "")
        return self


class OutputConfig(BaseSettings):
    """Optional result files."""

    model_config = _section_config("output")

    json_path: Path | None = None
    html_path: Path | None = None


class Settings(BaseModel):
    """Application settings."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


_SECTIONS: dict[str, type[BaseSettings]] = {
    "search": SearchConfig,
    "browser": BrowserConfig,
    "llm": LLMConfig,
    "output": OutputConfig,
}


def load_settings(env_file: str | Path | None = None, **overrides: dict[str, Any]) -> Settings:
    """Build Settings from the environment.

    Args:
        env_file: ``.env`` file to read instead of the one in the working directory.
        **overrides: Per-section dicts that take precedence over the
            environment, e.g. ``search={"topic": "graph neural networks"}``.
            None values are ignored.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    source: dict[str, Any] = {} if env_file is None else {"_env_file": env_file}
    sections: dict[str, BaseSettings] = {}
    try:
        for name, section_cls in _SECTIONS.items():
            given = {k: v for k, v in (overrides.get(name) or {}).items() if v is not None}
            sections[name] = section_cls(**source, **given)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e

    settings = Settings(**sections)
    logger.debug("Loaded settings: search=%s browser=%s", settings.search, settings.browser.browser)
    return settings


__all__ = [
    "SearchConfig",
    "BrowserConfig",
    "RetryConfig",
    "LLMConfig",
    "OutputConfig",
    "Settings",
    "load_settings",
]
