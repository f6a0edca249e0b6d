"""Validation of git object names: branches, tags, remotes, paths and stash messages.

Every function is pure: it takes the candidate string (plus options where
relevant) and returns a :class:`ValidationResult`. Invalid input is an
ordinary outcome and never raises.
"""
from typing import List, Optional

from ..models import BranchValidationOptions, ValidationResult
from ..rules import (
    FILE_URL_PATTERN,
    GIT_URL_PATTERN,
    HTTP_URL_PATTERN,
    MAX_STASH_MESSAGE_LENGTH,
    PATH_TRAVERSAL_PATTERN,
    SEMVER_PATTERN,
    SSH_SHORTHAND_PATTERN,
    SSH_URL_PATTERN,
    STANDARD_REMOTE_NAMES,
    UPPERCASE_PATTERN,
)
from .validation import create_branch_chain, create_remote_name_chain, create_tag_chain


def validate_branch_name(name: str, options: Optional[BranchValidationOptions] = None) -> ValidationResult:
    """Validate a branch name against git's ref-name rules.

    Args:
        name: Candidate branch name; surrounding whitespace is ignored
        options: Validation options, defaults to :class:`BranchValidationOptions`

    Returns:
        ValidationResult: The first rule violated, or a valid result carrying
        style warnings and suggestions
    """
    trimmed = (name or '').strip()

    failure = create_branch_chain(options).handle(trimmed)
    if failure is not None:
        return failure

    warnings: List[str] = []
    suggestions: List[str] = []

    if '/' not in trimmed:
        suggestions.append(
            'Consider using a prefix like feature/, bugfix/, or hotfix/ for better organization'
        )

    if len(trimmed) < 3:
        warnings.append('Branch name is very short, consider using a more descriptive name')

    if UPPERCASE_PATTERN.search(trimmed):
        warnings.append('Branch name contains uppercase letters, lowercase is recommended')

    if '_' in trimmed:
        warnings.append('Branch name contains underscores, consider using dashes instead')

    return ValidationResult(valid=True, warnings=warnings, suggestions=suggestions)


def validate_tag_name(name: str) -> ValidationResult:
    """Validate a tag name. Non-semver tags are valid but get a suggestion."""
    trimmed = (name or '').strip()

    failure = create_tag_chain().handle(trimmed)
    if failure is not None:
        return failure

    if not SEMVER_PATTERN.match(trimmed):
        return ValidationResult(
            valid=True,
            suggestions=['Consider using semantic versioning format: v1.0.0'],
        )

    return ValidationResult(valid=True)


def validate_remote_name(name: str) -> ValidationResult:
    """Validate a remote name (a single path segment)."""
    trimmed = (name or '').strip()

    failure = create_remote_name_chain().handle(trimmed)
    if failure is not None:
        return failure

    if trimmed.lower() not in STANDARD_REMOTE_NAMES:
        return ValidationResult(
            valid=True,
            suggestions=[f"Common remote names: {', '.join(STANDARD_REMOTE_NAMES)}"],
        )

    return ValidationResult(valid=True)


def validate_remote_url(url: str) -> ValidationResult:
    """Validate a remote URL.

    Accepts HTTP(S), SSH shorthand (user@host:path.git), ssh://, git:// and
    absolute local paths. The unencrypted git:// protocol is accepted with a
    warning.
    """
    trimmed = (url or '').strip()
    if not trimmed:
        return ValidationResult.failure('Remote URL cannot be empty')

    patterns = (
        HTTP_URL_PATTERN,
        SSH_SHORTHAND_PATTERN,
        SSH_URL_PATTERN,
        GIT_URL_PATTERN,
        FILE_URL_PATTERN,
    )
    if not any(pattern.match(trimmed) for pattern in patterns):
        return ValidationResult.failure(
            'Invalid remote URL format',
            suggestions=[
                'HTTPS: https://github.com/user/repo.git',
                'SSH: git@github.com:user/repo.git',
            ],
        )

    if GIT_URL_PATTERN.match(trimmed):
        return ValidationResult(
            valid=True,
            warnings=['Git protocol is unencrypted. Consider using HTTPS or SSH.'],
        )

    return ValidationResult(valid=True)


def validate_file_path(file_path: str) -> ValidationResult:
    """Validate a repository path: no null bytes and no '..' segments."""
    trimmed = (file_path or '').strip()
    if not trimmed:
        return ValidationResult.failure('File path cannot be empty')

    if '\0' in trimmed:
        return ValidationResult.failure('File path cannot contain null bytes')

    # Whole segments only, so names like foo..bar stay valid
    if PATH_TRAVERSAL_PATTERN.search(trimmed):
        return ValidationResult.failure(
            'File path cannot contain parent directory references (..)'
        )

    return ValidationResult(valid=True)


def validate_stash_message(message: str) -> ValidationResult:
    """Validate a stash message. Stash messages are optional in git."""
    trimmed = (message or '').strip()
    if not trimmed:
        return ValidationResult(
            valid=True,
            suggestions=['Consider adding a descriptive message for your stash'],
        )

    if len(trimmed) > MAX_STASH_MESSAGE_LENGTH:
        return ValidationResult.failure(
            f'Stash message is too long (max {MAX_STASH_MESSAGE_LENGTH} characters)'
        )

    return ValidationResult(valid=True)
