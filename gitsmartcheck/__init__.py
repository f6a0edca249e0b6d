"""Validation, sanitization and parsing of git branch, tag and remote names and commit messages."""

__version__ = "0.1.0"

from .commit_message import (
    CommitMessageValidator,
    generate_conventional_commit,
    parse_conventional_commit,
    validate_commit_message,
)
from .models import (
    BranchValidationOptions,
    CommitMessageOptions,
    CommitType,
    ParsedConventionalCommit,
    ValidationResult,
)
from .names import (
    sanitize_branch_name,
    validate_branch_name,
    validate_file_path,
    validate_remote_name,
    validate_remote_url,
    validate_stash_message,
    validate_tag_name,
)

__all__ = [
    "__version__",
    "BranchValidationOptions",
    "CommitMessageOptions",
    "CommitMessageValidator",
    "CommitType",
    "ParsedConventionalCommit",
    "ValidationResult",
    "generate_conventional_commit",
    "parse_conventional_commit",
    "sanitize_branch_name",
    "validate_branch_name",
    "validate_commit_message",
    "validate_file_path",
    "validate_remote_name",
    "validate_remote_url",
    "validate_stash_message",
    "validate_tag_name",
]
