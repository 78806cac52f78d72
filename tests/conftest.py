import pytest

from cachematrix.config import ENV_MAP


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CACHEMATRIX_* settings from the shell out of the tests."""
    for env_name in ENV_MAP.values():
        monkeypatch.delenv(env_name, raising=False)
