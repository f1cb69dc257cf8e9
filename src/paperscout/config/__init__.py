"""Configuration loading."""

from .settings import BrowserConfig, LLMConfig, OutputConfig, RetryConfig, SearchConfig, Settings, load_settings

__all__ = [
    "Settings",
    "SearchConfig",
    "BrowserConfig",
    "LLMConfig",
    "RetryConfig",
    "OutputConfig",
    "load_settings",
]
