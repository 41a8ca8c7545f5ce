import os

import pytest

from sqlbuilder.builder.configuration import reset_configuration
from sqlbuilder.logging import clear_request_context, set_logging_context
from sqlbuilder.metadata import get_metadata_provider
from sqlbuilder.settings import _reload_settings


@pytest.fixture(autouse=True)
def reset_sqlbuilder_state(monkeypatch):
    """Isolate process-wide state between tests."""
    for name in list(os.environ):
        if name.upper().startswith("SQLBUILDER_"):
            monkeypatch.delenv(name)

    _reload_settings()
    reset_configuration()
    get_metadata_provider().clear_cache()

    yield

    reset_configuration()
    get_metadata_provider().clear_cache()
    set_logging_context(environment=None, extra=None)
    clear_request_context()
