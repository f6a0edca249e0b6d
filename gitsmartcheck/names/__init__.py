"""Git object name validation and sanitization package."""

from .sanitizer import sanitize_branch_name
from .validator import (
    validate_branch_name,
    validate_file_path,
    validate_remote_name,
    validate_remote_url,
    validate_stash_message,
    validate_tag_name,
)

__all__ = [
    'sanitize_branch_name',
    'validate_branch_name',
    'validate_file_path',
    'validate_remote_name',
    'validate_remote_url',
    'validate_stash_message',
    'validate_tag_name',
]
