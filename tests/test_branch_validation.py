"""Tests for branch name validation."""
import re

import pytest
from pydantic import ValidationError

from gitsmartcheck.models import BranchValidationOptions
from gitsmartcheck.names import validate_branch_name
from gitsmartcheck.names.validation import (
    EmptyNameHandler,
    MaxLengthHandler,
    PrefixHandler,
    ReservedNameHandler,
    RuleHandler,
    create_branch_chain,
    link_handlers,
)


def test_valid_hierarchical_name():
    result = validate_branch_name("feature/add-login")
    assert result.valid
    assert result.error is None
    assert result.warnings == []
    assert result.suggestions == []


@pytest.mark.parametrize("name,error", [
    ("", "Branch name cannot be empty"),
    ("   ", "Branch name cannot be empty"),
    ("HEAD", "'HEAD' is a reserved name and cannot be used as a branch name"),
    ("fetch_head", "'fetch_head' is a reserved name and cannot be used as a branch name"),
    (".hidden", "Branch name cannot start with a dot"),
    ("feature.", "Branch name cannot end with a dot"),
    ("feature.lock", "Branch name cannot end with .lock"),
    ("feature..login", "Branch name cannot contain consecutive dots"),
    ("-feature", "Branch name cannot start with a dash"),
    ("feature/", "Branch name cannot end with a slash"),
    ("feature//login", "Branch name cannot contain consecutive slashes"),
    ("feature login", "Branch name cannot contain spaces"),
    ("feature\tlogin", "Branch name cannot contain spaces"),
    ("feature\x7flogin", "Branch name cannot contain control characters"),
    ("feature\x00login", "Branch name cannot contain control characters"),
])
def test_rule_violations(name, error):
    result = validate_branch_name(name)
    assert not result.valid
    assert result.error == error
    assert result.warnings == []


@pytest.mark.parametrize("char", list("~^:?*[]@{\\"))
def test_forbidden_characters(char):
    result = validate_branch_name(f"feature{char}login")
    assert not result.valid
    assert result.error == "Branch name cannot contain special characters: ~ ^ : ? * [ ] @ { \\"


def test_surrounding_whitespace_is_ignored():
    assert validate_branch_name("  feature/login  ").valid


def test_first_violated_rule_wins():
    # Leading dash and trailing space: the space is trimmed away first
    assert validate_branch_name("-feature ").error == "Branch name cannot start with a dash"
    # Starts with a dot and ends with .lock
    assert validate_branch_name(".feature.lock").error == "Branch name cannot start with a dot"
    # Too long and reserved: length is checked first
    options = BranchValidationOptions(max_length=3)
    assert validate_branch_name("HEAD", options).error == \
        "Branch name exceeds maximum length of 3 characters"


def test_max_length():
    assert validate_branch_name("a" * 250).valid
    result = validate_branch_name("a" * 251)
    assert not result.valid
    assert result.error == "Branch name exceeds maximum length of 250 characters"


@pytest.mark.parametrize("max_length", [0, None])
def test_max_length_disabled(max_length):
    options = BranchValidationOptions(max_length=max_length)
    assert validate_branch_name("a" * 1000, options).valid


def test_custom_reserved_names():
    options = BranchValidationOptions(reserved_names=["PRODUCTION"])
    assert not validate_branch_name("production", options).valid
    assert validate_branch_name("HEAD-ish", options).valid


def test_slashes_disallowed():
    options = BranchValidationOptions(allow_slash=False)
    result = validate_branch_name("feature/login", options)
    assert not result.valid
    assert result.error == "Branch name cannot contain slashes"
    assert validate_branch_name("login", options).valid


def test_enforce_prefix():
    options = BranchValidationOptions(enforce_prefix=["feature", "bugfix"])

    assert validate_branch_name("feature/login", options).valid
    assert validate_branch_name("bugfix/crash", options).valid

    result = validate_branch_name("login", options)
    assert not result.valid
    assert result.error == "Branch name must start with one of: feature, bugfix"
    assert result.suggestions == ["feature/login", "bugfix/login"]


def test_enforce_prefix_requires_separator():
    options = BranchValidationOptions(enforce_prefix=["feature"])
    assert not validate_branch_name("features/login", options).valid


def test_empty_prefix_list_is_ignored():
    options = BranchValidationOptions(enforce_prefix=[])
    assert validate_branch_name("login", options).valid


def test_custom_pattern():
    options = BranchValidationOptions(pattern=r"^[a-z]+/JIRA-\d+")
    assert validate_branch_name("feature/JIRA-42-login", options).valid

    result = validate_branch_name("feature/login", options)
    assert not result.valid
    assert result.error == "Branch name does not match the required pattern"


def test_pattern_uses_search():
    options = BranchValidationOptions(pattern=re.compile(r"\d+"))
    assert validate_branch_name("fix-123-crash", options).valid


def test_invalid_pattern_rejected_at_construction():
    with pytest.raises(ValidationError):
        BranchValidationOptions(pattern="feature/(")


def test_negative_max_length_rejected():
    with pytest.raises(ValidationError):
        BranchValidationOptions(max_length=-1)


def test_style_warnings_and_suggestions():
    result = validate_branch_name("My_Branch")
    assert result.valid
    assert "Branch name contains uppercase letters, lowercase is recommended" in result.warnings
    assert "Branch name contains underscores, consider using dashes instead" in result.warnings
    assert result.suggestions == [
        "Consider using a prefix like feature/, bugfix/, or hotfix/ for better organization"
    ]


def test_short_name_warning():
    result = validate_branch_name("ab")
    assert result.valid
    assert result.warnings == ["Branch name is very short, consider using a more descriptive name"]


def test_none_is_treated_as_empty():
    result = validate_branch_name(None)
    assert not result.valid
    assert result.error == "Branch name cannot be empty"


def test_handler_chain():
    chain = link_handlers([
        EmptyNameHandler("Branch name"),
        MaxLengthHandler(5),
        ReservedNameHandler(["HEAD"]),
        RuleHandler(lambda n: "x" in n, "no x"),
    ])

    assert chain.handle("").error == "Branch name cannot be empty"
    assert chain.handle("abcdef").error == "Branch name exceeds maximum length of 5 characters"
    assert chain.handle("head").error.startswith("'head' is a reserved name")
    assert chain.handle("box").error == "no x"
    assert chain.handle("abc") is None


def test_prefix_handler_validate():
    handler = PrefixHandler(["feature"])
    assert handler.validate("feature/a") is None
    failure = handler.validate("a")
    assert failure.suggestions == ["feature/a"]


def test_chain_without_optional_handlers_passes_slashes():
    chain = create_branch_chain()
    assert chain.handle("feature/a/b") is None
