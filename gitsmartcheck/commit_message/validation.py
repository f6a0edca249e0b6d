"""Commit message validation using Chain of Responsibility pattern.

The chain holds the rules that reject a message outright. Style advice
(blank separator line, body line length, trailing period) never fails a
message and is collected by the validator once the chain has passed.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..models import CommitMessageOptions, ValidationResult
from ..rules import CONVENTIONAL_COMMIT_PATTERN


def subject_of(message: str) -> str:
    return message.split('\n')[0].strip()


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: str) -> Optional[ValidationResult]:
        """Handle validation and pass to next handler if valid."""
        failure = self.validate(message)
        if failure is not None or not self.next_handler:
            return failure
        return self.next_handler.handle(message)

    @abstractmethod
    def validate(self, message: str) -> Optional[ValidationResult]:
        """Validate the commit message."""
        pass


class EmptyMessageHandler(ValidationHandler):
    """Validates that the message is not empty."""

    def validate(self, message: str) -> Optional[ValidationResult]:
        if not message or not message.strip():
            return ValidationResult.failure('Commit message cannot be empty')
        return None


class EmptySubjectHandler(ValidationHandler):
    """Validates that the first line carries a subject."""

    def validate(self, message: str) -> Optional[ValidationResult]:
        if not subject_of(message):
            return ValidationResult.failure('Commit subject line cannot be empty')
        return None


class SubjectLengthHandler(ValidationHandler):
    """Validates the subject line length."""

    def __init__(self, max_length: int = 72, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, message: str) -> Optional[ValidationResult]:
        subject = subject_of(message)
        if len(subject) > self.max_length:
            return ValidationResult.failure(
                f'Commit subject line exceeds {self.max_length} characters ({len(subject)})',
                suggestions=[f'Consider: "{subject[:max(self.max_length - 3, 0)]}..."'],
            )
        return None


class ConventionalFormatHandler(ValidationHandler):
    """Validates conventional commit format, type and scope."""

    def __init__(self, options: CommitMessageOptions, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.options = options

    def validate(self, message: str) -> Optional[ValidationResult]:
        subject = subject_of(message)
        match = CONVENTIONAL_COMMIT_PATTERN.match(subject)
        if not match:
            return ValidationResult.failure(
                'Commit message must follow Conventional Commits format: type(scope): description',
                suggestions=[f'Example: feat: {subject}', f'Example: fix(core): {subject}'],
            )

        commit_type, scope = match.group(1), match.group(2)
        allowed_types = self.options.allowed_types
        if allowed_types is not None and commit_type not in allowed_types:
            return ValidationResult.failure(
                f"Invalid commit type: '{commit_type}'. Allowed types: {', '.join(allowed_types)}"
            )

        if self.options.require_scope and not scope:
            return ValidationResult.failure(
                'Commit message must include a scope: type(scope): description'
            )

        allowed_scopes = self.options.allowed_scopes
        if scope and allowed_scopes is not None and scope not in allowed_scopes:
            return ValidationResult.failure(
                f"Invalid commit scope: '{scope}'. Allowed scopes: {', '.join(allowed_scopes)}"
            )
        return None


def create_validation_chain(options: Optional[CommitMessageOptions] = None) -> ValidationHandler:
    """Create the commit message validation chain."""
    opts = options or CommitMessageOptions()

    conventional = ConventionalFormatHandler(opts) if opts.require_type else None
    subject_length = (
        SubjectLengthHandler(opts.max_subject_length, conventional)
        if opts.max_subject_length else conventional
    )
    empty_subject = EmptySubjectHandler(subject_length)
    empty_message = EmptyMessageHandler(empty_subject)

    return empty_message
