import pytest

from ubersmith.config.settings import get_settings
from ubersmith.core.env import load_dotenv_if_present

_ENV_VARS = [
    "UBERSMITH_CONFIG_PATH",
    "UBERSMITH_LOG_LEVEL",
    "UBERSMITH_HOST",
    "UBERSMITH_USER",
    "UBERSMITH_TOKEN",
    "UBERSMITH_DEBUG",
    "UBERSMITH_VERIFY_TLS",
    "UBERSMITH_TIMEOUT_SECONDS",
]


def _clear_caches():
    get_settings.cache_clear()
    load_dotenv_if_present.cache_clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    # Keep a developer's shell or .env from leaking into tests.
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("UBERSMITH_ENV_FILE", str(tmp_path / "missing.env"))
    _clear_caches()
    yield
    _clear_caches()
