"""Shared models for git-smart-check."""
from enum import Enum
from re import Pattern
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import DEFAULT_MAX_LENGTH, DEFAULT_RESERVED_NAMES


class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"


DEFAULT_COMMIT_TYPES = [commit_type.value for commit_type in CommitType]

# Config value for "any commit type"; stands in for None, which TOML cannot hold
ANY_COMMIT_TYPE = "*"


class ValidationResult(BaseModel):
    """Outcome of a single validation call.

    ``error`` is only set when ``valid`` is False, and a failed result never
    carries warnings: the first violated rule ends the check.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @classmethod
    def failure(cls, error: str, suggestions: Optional[List[str]] = None) -> 'ValidationResult':
        return cls(valid=False, error=error, suggestions=suggestions or [])


class BranchValidationOptions(BaseModel):
    """Per-call options for branch name validation."""

    allow_slash: bool = Field(
        default=True,
        description="Whether hierarchical names such as feature/login are accepted"
    )

    max_length: Optional[int] = Field(
        default=DEFAULT_MAX_LENGTH,
        ge=0,
        description="Maximum length of the trimmed name (0 or None disables the check)"
    )

    reserved_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_RESERVED_NAMES),
        description="Names (compared upper-cased) that can never be used for a branch"
    )

    pattern: Optional[Pattern] = Field(
        default=None,
        description="Custom regex the name must match"
    )

    enforce_prefix: Optional[List[str]] = Field(
        default=None,
        description="Required prefixes, each followed by a slash (e.g. feature, bugfix)"
    )

    @field_validator('max_length', mode='after')
    @classmethod
    def _disabled_length_is_zero(cls, value: Optional[int]) -> int:
        return value or 0


class CommitMessageOptions(BaseModel):
    """Per-call options for commit message validation."""

    max_subject_length: Optional[int] = Field(
        default=72,
        ge=0,
        description="Maximum length of the subject line"
    )

    max_body_line_length: Optional[int] = Field(
        default=100,
        ge=0,
        description="Body lines longer than this produce a warning"
    )

    require_type: bool = Field(
        default=False,
        description="Whether the subject must follow the Conventional Commits grammar"
    )

    require_scope: bool = Field(
        default=False,
        description="Whether a (scope) is mandatory when require_type is set"
    )

    allowed_types: Optional[List[str]] = Field(
        default_factory=lambda: list(DEFAULT_COMMIT_TYPES),
        description="Commit types accepted when require_type is set"
    )

    allowed_scopes: Optional[List[str]] = Field(
        default=None,
        description="Optional allow-list of scopes"
    )

    @field_validator('max_subject_length', 'max_body_line_length', mode='after')
    @classmethod
    def _disabled_length_is_zero(cls, value: Optional[int]) -> int:
        return value or 0

    @field_validator('allowed_types', mode='before')
    @classmethod
    def _any_type(cls, value):
        if value == ANY_COMMIT_TYPE or value == [ANY_COMMIT_TYPE]:
            return None
        return value


class ParsedConventionalCommit(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    scope: Optional[str] = None
    breaking: bool = False
    description: str
    body: Optional[str] = None
    footer: Optional[str] = None
