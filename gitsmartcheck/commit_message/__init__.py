"""Commit message validation, parsing and generation package."""

from .generator import generate_conventional_commit
from .parser import parse_conventional_commit
from .validator import CommitMessageValidator, validate_commit_message

__all__ = [
    'CommitMessageValidator',
    'generate_conventional_commit',
    'parse_conventional_commit',
    'validate_commit_message',
]
