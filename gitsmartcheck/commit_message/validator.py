"""Commit message validation."""
from typing import List, Optional

from ..models import CommitMessageOptions, ValidationResult
from ..rules import CONVENTIONAL_COMMIT_PATTERN, UPPERCASE_PATTERN
from .validation import create_validation_chain, subject_of


def validate_commit_message(message: str, options: Optional[CommitMessageOptions] = None) -> ValidationResult:
    """Validate a commit message.

    Hard failures (empty message, empty or overlong subject, and with
    ``require_type`` the Conventional Commits grammar) are checked first, in
    that order. A message passing them is valid and may carry warnings about
    body layout and subject style.

    Args:
        message: Full commit message, subject on the first line
        options: Validation options, defaults to :class:`CommitMessageOptions`

    Returns:
        ValidationResult: Validation outcome
    """
    opts = options or CommitMessageOptions()

    failure = create_validation_chain(opts).handle(message or '')
    if failure is not None:
        return failure

    warnings: List[str] = []
    suggestions: List[str] = []
    lines = message.split('\n')
    subject = subject_of(message)
    match = CONVENTIONAL_COMMIT_PATTERN.match(subject)

    if len(lines) > 1:
        if lines[1].strip():
            warnings.append('The second line should be blank to separate subject from body')

        if opts.max_body_line_length:
            for number, line in enumerate(lines[2:], start=3):
                if len(line) > opts.max_body_line_length:
                    warnings.append(f'Line {number} exceeds {opts.max_body_line_length} characters')

    if subject.endswith('.'):
        warnings.append('Subject line should not end with a period')

    # Freeform subjects only; conventional ones start with a lowercase type
    if not match and not UPPERCASE_PATTERN.match(subject):
        suggestions.append('Consider capitalizing the first letter of the subject')

    if not match:
        suggestions.append('Consider using Conventional Commits format: type(scope): description')

    return ValidationResult(valid=True, warnings=warnings, suggestions=suggestions)


class CommitMessageValidator:
    """Validates commit messages against a fixed set of options."""

    def __init__(self, options: Optional[CommitMessageOptions] = None):
        self.options = options or CommitMessageOptions()

    def validate(self, message: str) -> ValidationResult:
        """Validate a commit message against the bound options."""
        return validate_commit_message(message, self.options)
