import sys
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

# Ensure local source package (src/odata_client) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from odata_client import __version__  # noqa: E402
from odata_client._config import Config  # noqa: E402
from odata_client._services import BaseService  # noqa: E402


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "ODATA_URL",
        "ODATA_ACCESS_TOKEN",
        "ODATA_TIMEOUT",
        "ODATA_MAX_RETRIES",
        "ODATA_DISABLE_SSL_VERIFY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://example.com/odata.svc"


@pytest.fixture
def secret() -> str:
    return "secret"


@pytest.fixture
def version() -> str:
    return __version__


@pytest.fixture
def config(base_url: str, secret: str) -> Config:
    return Config(base_url=base_url, secret=secret, max_retries=2)


@pytest.fixture
def service(config: Config) -> Generator[BaseService, None, None]:
    service = BaseService(config=config)
    yield service
    service.close()
