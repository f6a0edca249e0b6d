import pytest
from click.testing import CliRunner

from gitsmartcheck.config import ENV_MAPPING


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GIT_SMART_CHECK_* variables from the outer shell out of the tests."""
    for env_var in ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)
    yield


@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()
