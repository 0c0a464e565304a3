import pytest

from restclient import Auth


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def auth() -> Auth:
    return Auth(username="edward", password="pass")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("RESTCLIENT_TIMEOUT", raising=False)
    monkeypatch.delenv("RESTCLIENT_DEBUG", raising=False)
