"""Tests for branch name sanitization."""
import pytest

from gitsmartcheck.names import sanitize_branch_name, validate_branch_name


@pytest.mark.parametrize("text,expected", [
    ("Feature Name", "feature-name"),
    ("fix: bug #123", "fix-bug-123"),
    ("  Add   user_profile  ", "add-user-profile"),
    ("feature//login", "feature/login"),
    ("release...1", "release.1"),
    ("-leading/", "leading"),
    ("./hidden", "hidden"),
    ("what? [draft] @wip", "what-draft-wip"),
    ("config.lock", "config"),
    ("a.lock.lock", "a"),
    ("head", "head-branch"),
    ("Fetch Head", "fetch-head"),
    ("tab\tseparated", "tab-separated"),
])
def test_sanitize_examples(text, expected):
    assert sanitize_branch_name(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "~^:?*", "...", "---", "///", "#", "-./", None])
def test_sanitize_to_empty(text):
    assert sanitize_branch_name(text) == ""


def test_truncates_to_max_length():
    result = sanitize_branch_name("a" * 300)
    assert result == "a" * 250


def test_truncation_does_not_leave_trailing_separator():
    result = sanitize_branch_name("a" * 249 + "-bcd")
    assert result == "a" * 249
    assert validate_branch_name(result).valid


ADVERSARIAL_INPUTS = [
    "Feature Name",
    "fix: bug #123",
    "HEAD",
    "ORIG_HEAD",
    "head.lock",
    "x.lock.",
    "..double..dots..",
    "a/./b",
    "a/../b",
    "-/-/-",
    "/.lock",
    "feature/.lock/",
    "a\x00b\x1fc\x7fd",
    "a.\x7f.b",
    "a.#.b",
    "a/#/b",
    "a.~.b",
    "back\\slash",
    "@{upstream}",
    "emoji 🚀 launch",
    "ÜBER straße",
    "tabs\tand\nnewlines\r\n",
    " non breaking space",
    "___init___",
    "a" * 249 + ".lock",
    "a" * 248 + "/b",
    "a" * 250 + ".b",
    "." * 300,
    "x" + "-" * 260 + "y",
    "release/v1.2.3",
    "feature/JIRA-123-Login Page",
]


@pytest.mark.parametrize("text", ADVERSARIAL_INPUTS)
def test_sanitize_is_idempotent(text):
    once = sanitize_branch_name(text)
    assert sanitize_branch_name(once) == once


@pytest.mark.parametrize("text", ADVERSARIAL_INPUTS)
def test_sanitized_name_is_valid(text):
    result = sanitize_branch_name(text)
    if result:
        validation = validate_branch_name(result)
        assert validation.valid, f"{result!r}: {validation.error}"
