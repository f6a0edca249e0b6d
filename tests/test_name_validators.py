"""Tests for tag, remote, path and stash validation."""
import pytest

from gitsmartcheck.names import (
    validate_file_path,
    validate_remote_name,
    validate_remote_url,
    validate_stash_message,
    validate_tag_name,
)


class TestTagName:
    @pytest.mark.parametrize("name", ["v1.0.0", "1.2.3", "v2.0.0-rc.1", "v1.0.0+build.5"])
    def test_semver_tags(self, name):
        result = validate_tag_name(name)
        assert result.valid
        assert result.suggestions == []

    def test_non_semver_tag_is_valid_with_suggestion(self):
        result = validate_tag_name("release-2024")
        assert result.valid
        assert result.suggestions == ["Consider using semantic versioning format: v1.0.0"]

    @pytest.mark.parametrize("name", ["v١.٢.٣", "v1.0.0-bêta", "v１.0.0"])
    def test_non_ascii_digits_are_not_semver(self, name):
        result = validate_tag_name(name)
        assert result.valid
        assert result.suggestions == ["Consider using semantic versioning format: v1.0.0"]

    @pytest.mark.parametrize("name,error", [
        ("", "Tag name cannot be empty"),
        ("v1 final", "Tag name cannot contain spaces"),
        ("v1:0", "Tag name cannot contain special characters: ~ ^ : ? * [ ] @ { \\"),
        ("-v1.0.0", "Tag name cannot start with a dash"),
    ])
    def test_invalid_tags(self, name, error):
        result = validate_tag_name(name)
        assert not result.valid
        assert result.error == error

    def test_consecutive_dots_are_not_checked(self):
        assert validate_tag_name("v1..0").valid


class TestRemoteName:
    @pytest.mark.parametrize("name", ["origin", "upstream", "fork", "Origin"])
    def test_standard_names(self, name):
        result = validate_remote_name(name)
        assert result.valid
        assert result.suggestions == []

    def test_custom_name_gets_suggestion(self):
        result = validate_remote_name("mirror")
        assert result.valid
        assert result.suggestions == ["Common remote names: origin, upstream, fork"]

    @pytest.mark.parametrize("name,error", [
        ("", "Remote name cannot be empty"),
        ("my remote", "Remote name cannot contain spaces"),
        ("team/origin", "Remote name cannot contain special characters"),
        ("origin~1", "Remote name cannot contain special characters"),
    ])
    def test_invalid_names(self, name, error):
        result = validate_remote_name(name)
        assert not result.valid
        assert result.error == error


class TestRemoteUrl:
    @pytest.mark.parametrize("url", [
        "https://github.com/user/repo.git",
        "HTTP://example.com/user/repo.GIT",
        "git@github.com:user/repo.git",
        "deploy@gitlab.example.com:group/sub/repo.git",
        "ssh://git@github.com/user/repo.git",
        "/srv/git/repo.git",
        "file:///srv/git/repo",
    ])
    def test_valid_urls(self, url):
        result = validate_remote_url(url)
        assert result.valid
        assert result.warnings == []

    def test_git_protocol_warns(self):
        result = validate_remote_url("git://example.com/repo.git")
        assert result.valid
        assert result.warnings == ["Git protocol is unencrypted. Consider using HTTPS or SSH."]

    @pytest.mark.parametrize("url", [
        "ftp://github.com/user/repo.git",
        "https://github.com/user/repo",
        "github.com/user/repo.git",
        "relative/path",
    ])
    def test_invalid_urls(self, url):
        result = validate_remote_url(url)
        assert not result.valid
        assert result.error == "Invalid remote URL format"
        assert result.suggestions == [
            "HTTPS: https://github.com/user/repo.git",
            "SSH: git@github.com:user/repo.git",
        ]

    def test_empty_url(self):
        result = validate_remote_url("  ")
        assert not result.valid
        assert result.error == "Remote URL cannot be empty"


class TestFilePath:
    @pytest.mark.parametrize("path", ["src/main.py", "foo..bar", "docs/..hidden", "a/b../c"])
    def test_valid_paths(self, path):
        assert validate_file_path(path).valid

    @pytest.mark.parametrize("path", ["..", "../etc/passwd", "src/../secret", "src/.."])
    def test_traversal_rejected(self, path):
        result = validate_file_path(path)
        assert not result.valid
        assert result.error == "File path cannot contain parent directory references (..)"

    def test_null_byte_rejected(self):
        result = validate_file_path("src/\0main.py")
        assert not result.valid
        assert result.error == "File path cannot contain null bytes"

    def test_empty_path(self):
        assert validate_file_path("").error == "File path cannot be empty"


class TestStashMessage:
    def test_empty_message_is_valid(self):
        result = validate_stash_message("")
        assert result.valid
        assert result.suggestions == ["Consider adding a descriptive message for your stash"]

    def test_regular_message(self):
        result = validate_stash_message("WIP on login form")
        assert result.valid
        assert result.suggestions == []

    def test_length_limit(self):
        assert validate_stash_message("x" * 500).valid
        result = validate_stash_message("x" * 501)
        assert not result.valid
        assert result.error == "Stash message is too long (max 500 characters)"
