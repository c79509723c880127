import os

import pytest

PORTAL_ENV_KEYS = (
    "PORTAL_BASE_URL",
    "PORTAL_TIMEOUT_SECONDS",
    "PORTAL_VERIFY_SSL",
    "PORTAL_RETRY_MAX_ATTEMPTS",
    "PORTAL_RETRY_BACKOFF_MS",
    "PORTAL_PAGE_SIZE",
    "PORTAL_SEARCH_DEBOUNCE_MS",
    "PORTAL_TIMEZONE",
    "PORTAL_CALENDAR",
    "PORTAL_ACCESS_TOKEN",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for key in PORTAL_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for key in PORTAL_ENV_KEYS:
        os.environ.pop(key, None)
