"""Security tests for configuration input."""
import pytest

from gitsmartcheck.config import DEFAULT_CONFIG_FILENAME, Config, clean_log_path, is_safe_log_path


@pytest.mark.parametrize("path", [
    "../outside.log",
    "logs/../../etc/passwd",
    "/var/log/check.log",
    "C:\\Windows\\check.log",
    "logs\\check.log",
    "",
])
def test_unsafe_log_paths(path):
    assert not is_safe_log_path(path)


@pytest.mark.parametrize("path", ["check.log", "logs/check.log", ".logs/run.log"])
def test_safe_log_paths(path):
    assert is_safe_log_path(path)


@pytest.mark.parametrize("value,expected", [
    ("check.log; rm -rf /", "check.log"),
    ("check.log && curl evil", "check.log"),
    ("check$(whoami).log", "check"),
    ("che\x00ck\x1b.log", "check.log"),
    ("  padded.log  ", "padded.log"),
])
def test_clean_log_path(value, expected):
    assert clean_log_path(value) == expected


def test_clean_log_path_limits_length():
    assert len(clean_log_path("a" * 5000)) == 1000


def test_environment_variable_injection(monkeypatch):
    monkeypatch.setenv("GIT_SMART_CHECK_LOG_FILE", "log.txt`reboot`")
    config = Config()
    assert config.log_file == "log.txt"


def test_config_file_cannot_point_log_outside_repo(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text('log_file = "/etc/cron.d/job"\n')
    config = Config.load(tmp_path)
    assert config.log_file is None
    assert config.get_log_file() is None


def test_unsafe_log_file_not_saved(tmp_path):
    config = Config(log_file="../elsewhere.log")
    config.save(tmp_path)
    assert "log_file" not in (tmp_path / DEFAULT_CONFIG_FILENAME).read_text()


def test_branch_pattern_is_not_executed_as_code():
    # Patterns are compiled as regexes only
    config = Config(branch={"pattern": "__import__('os')"})
    assert config.branch.pattern.pattern == "__import__('os')"
