"""Git name validation using Chain of Responsibility pattern.

Each handler checks one rule and either reports a failure or passes the
name on. The order of the chain is part of the contract: a name breaking
several rules reports the first one.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..models import BranchValidationOptions, ValidationResult
from ..rules import (
    CONTROL_CHARS_PATTERN,
    FORBIDDEN_CHARS,
    FORBIDDEN_CHARS_PATTERN,
    REMOTE_FORBIDDEN_CHARS_PATTERN,
    WHITESPACE_PATTERN,
)


class ValidationHandler(ABC):
    """Abstract base class for name validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, name: str) -> Optional[ValidationResult]:
        """Return the first failure along the chain, or None if every rule passes."""
        failure = self.validate(name)
        if failure is not None or not self.next_handler:
            return failure
        return self.next_handler.handle(name)

    @abstractmethod
    def validate(self, name: str) -> Optional[ValidationResult]:
        """Validate the name, returning a failed result or None."""
        pass


class EmptyNameHandler(ValidationHandler):
    """Validates that the name is not empty."""

    def __init__(self, label: str, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.label = label

    def validate(self, name: str) -> Optional[ValidationResult]:
        if not name:
            return ValidationResult.failure(f'{self.label} cannot be empty')
        return None


class RuleHandler(ValidationHandler):
    """Rejects names for which ``violates`` returns True."""

    def __init__(self, violates: Callable[[str], bool], error: str,
                 next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.violates = violates
        self.error = error

    def validate(self, name: str) -> Optional[ValidationResult]:
        if self.violates(name):
            return ValidationResult.failure(self.error)
        return None


class MaxLengthHandler(ValidationHandler):
    """Validates the name length."""

    def __init__(self, max_length: int, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, name: str) -> Optional[ValidationResult]:
        if len(name) > self.max_length:
            return ValidationResult.failure(
                f'Branch name exceeds maximum length of {self.max_length} characters'
            )
        return None


class ReservedNameHandler(ValidationHandler):
    """Validates that the name is not one of git's special refs."""

    def __init__(self, reserved_names: Sequence[str], next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.reserved_names = set(reserved_names)

    def validate(self, name: str) -> Optional[ValidationResult]:
        if name.upper() in self.reserved_names:
            return ValidationResult.failure(
                f"'{name}' is a reserved name and cannot be used as a branch name"
            )
        return None


class PrefixHandler(ValidationHandler):
    """Validates that the name starts with one of the required prefixes."""

    def __init__(self, prefixes: Sequence[str], next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.prefixes = list(prefixes)

    def validate(self, name: str) -> Optional[ValidationResult]:
        if any(name.startswith(prefix + '/') for prefix in self.prefixes):
            return None
        return ValidationResult.failure(
            f"Branch name must start with one of: {', '.join(self.prefixes)}",
            suggestions=[f'{prefix}/{name}' for prefix in self.prefixes],
        )


class PatternHandler(ValidationHandler):
    """Validates the name against a custom pattern."""

    def __init__(self, pattern, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.pattern = pattern

    def validate(self, name: str) -> Optional[ValidationResult]:
        if not self.pattern.search(name):
            return ValidationResult.failure('Branch name does not match the required pattern')
        return None


def link_handlers(handlers: List[ValidationHandler]) -> ValidationHandler:
    """Chain handlers in list order and return the head of the chain."""
    for current, following in zip(handlers, handlers[1:]):
        current.next_handler = following
    return handlers[0]


def create_branch_chain(options: Optional[BranchValidationOptions] = None) -> ValidationHandler:
    """Create the branch name validation chain for the given options."""
    opts = options or BranchValidationOptions()
    handlers: List[ValidationHandler] = [EmptyNameHandler('Branch name')]

    if opts.max_length:
        handlers.append(MaxLengthHandler(opts.max_length))
    if opts.reserved_names:
        handlers.append(ReservedNameHandler(opts.reserved_names))

    handlers.extend([
        RuleHandler(lambda n: n.startswith('.'), 'Branch name cannot start with a dot'),
        RuleHandler(lambda n: n.endswith('.'), 'Branch name cannot end with a dot'),
        RuleHandler(lambda n: n.endswith('.lock'), 'Branch name cannot end with .lock'),
        RuleHandler(lambda n: '..' in n, 'Branch name cannot contain consecutive dots'),
        RuleHandler(lambda n: n.startswith('-'), 'Branch name cannot start with a dash'),
        RuleHandler(lambda n: n.endswith('/'), 'Branch name cannot end with a slash'),
        RuleHandler(lambda n: '//' in n, 'Branch name cannot contain consecutive slashes'),
        RuleHandler(lambda n: bool(WHITESPACE_PATTERN.search(n)), 'Branch name cannot contain spaces'),
        RuleHandler(lambda n: bool(CONTROL_CHARS_PATTERN.search(n)),
                    'Branch name cannot contain control characters'),
        RuleHandler(lambda n: bool(FORBIDDEN_CHARS_PATTERN.search(n)),
                    f'Branch name cannot contain special characters: {FORBIDDEN_CHARS}'),
    ])

    if not opts.allow_slash:
        handlers.append(RuleHandler(lambda n: '/' in n, 'Branch name cannot contain slashes'))
    if opts.enforce_prefix:
        handlers.append(PrefixHandler(opts.enforce_prefix))
    if opts.pattern is not None:
        handlers.append(PatternHandler(opts.pattern))

    return link_handlers(handlers)


def create_tag_chain() -> ValidationHandler:
    """Create the tag name validation chain."""
    return link_handlers([
        EmptyNameHandler('Tag name'),
        RuleHandler(lambda n: bool(WHITESPACE_PATTERN.search(n)), 'Tag name cannot contain spaces'),
        RuleHandler(lambda n: bool(FORBIDDEN_CHARS_PATTERN.search(n)),
                    f'Tag name cannot contain special characters: {FORBIDDEN_CHARS}'),
        RuleHandler(lambda n: n.startswith('-'), 'Tag name cannot start with a dash'),
    ])


def create_remote_name_chain() -> ValidationHandler:
    """Create the remote name validation chain."""
    return link_handlers([
        EmptyNameHandler('Remote name'),
        RuleHandler(lambda n: bool(WHITESPACE_PATTERN.search(n)), 'Remote name cannot contain spaces'),
        RuleHandler(lambda n: bool(REMOTE_FORBIDDEN_CHARS_PATTERN.search(n)),
                    'Remote name cannot contain special characters'),
    ])
