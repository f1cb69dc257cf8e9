import os

import pytest

from paperscout.core.models import SearchCriteria
from paperscout.diagnostics import LoggingDiagnostics

_SETTINGS_VARIABLES = ("CEREBRAS_API_KEY", "OPENROUTER_API_KEY")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the caller's PAPERSCOUT_* variables and .env file out of settings."""
    for name in list(os.environ):
        if name.upper().startswith("PAPERSCOUT_") or name.upper() in _SETTINGS_VARIABLES:
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def criteria():
    return SearchCriteria(topic="large language models", year="2024", max_results=4, max_abstract_length=300)


@pytest.fixture
def diagnostics():
    return LoggingDiagnostics()
