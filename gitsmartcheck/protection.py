"""Branch protection rules and naming conventions.

Protection rules decide whether destructive operations (delete, force push,
direct push) are allowed on a branch. The naming convention layers team
rules (prefixes, ticket numbers, recommended patterns) on top of git's own
branch name rules.
"""
import re
from re import Pattern
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from .models import BranchValidationOptions
from .names import sanitize_branch_name, validate_branch_name


class BranchProtectionRule(BaseModel):
    """Protection settings for branches matching ``pattern``."""

    pattern: str = Field(description="Branch name, or a regex when is_regex is set")
    is_regex: bool = False
    prevent_delete: bool = False
    prevent_force_push: bool = False
    require_pull_request: bool = False
    require_linear_history: bool = False
    require_signed_commits: bool = False
    allowed_pushers: Optional[List[str]] = None

    @model_validator(mode='after')
    def _check_pattern(self) -> 'BranchProtectionRule':
        if self.is_regex:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern '{self.pattern}': {e}") from e
        return self

    def matches(self, branch_name: str) -> bool:
        if self.is_regex:
            return re.search(self.pattern, branch_name) is not None
        return branch_name == self.pattern


DEFAULT_PROTECTED_BRANCHES = [
    BranchProtectionRule(pattern='main', prevent_delete=True, prevent_force_push=True,
                         require_pull_request=True),
    BranchProtectionRule(pattern='master', prevent_delete=True, prevent_force_push=True,
                         require_pull_request=True),
    BranchProtectionRule(pattern='develop', prevent_delete=True, prevent_force_push=True),
    BranchProtectionRule(pattern='^release/.*$', is_regex=True, prevent_force_push=True,
                         require_pull_request=True),
    BranchProtectionRule(pattern='^hotfix/.*$', is_regex=True, prevent_force_push=True,
                         require_pull_request=True),
]

DEFAULT_BRANCH_PREFIXES = ['feature', 'bugfix', 'hotfix', 'release', 'docs', 'chore', 'refactor', 'test']


def default_protection_rules() -> List[BranchProtectionRule]:
    return [rule.model_copy() for rule in DEFAULT_PROTECTED_BRANCHES]


class BranchNamingConvention(BaseModel):
    """Team naming convention for new branches."""

    enabled: bool = False
    patterns: List[Pattern] = Field(
        default_factory=lambda: [
            re.compile(r'^(feature|bugfix|hotfix|release|docs|chore|refactor|test)/[a-z0-9-]+$')
        ],
        description="Recommended patterns; a name matching none of them gets a warning"
    )
    prefixes: List[str] = Field(default_factory=lambda: list(DEFAULT_BRANCH_PREFIXES))
    separator: str = '/'
    require_ticket_number: bool = False
    ticket_pattern: Optional[Pattern] = Field(default=re.compile(r'[A-Z]+-\d+'))
    max_length: int = Field(default=100, ge=1)


class BranchOperationValidation(BaseModel):
    """Whether an operation on a branch is allowed, and why not."""

    allowed: bool
    rule: Optional[BranchProtectionRule] = None
    reason: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class BranchProtection:
    """Evaluates protection rules and the naming convention for branches.

    Attributes:
        branch_options: Options used for git's own branch name rules
    """

    def __init__(
        self,
        rules: Optional[List[BranchProtectionRule]] = None,
        naming: Optional[BranchNamingConvention] = None,
        branch_options: Optional[BranchValidationOptions] = None,
    ):
        self._rules = list(rules) if rules is not None else default_protection_rules()
        self._naming = naming or BranchNamingConvention()
        self.branch_options = branch_options

    @property
    def rules(self) -> List[BranchProtectionRule]:
        return list(self._rules)

    @property
    def naming_convention(self) -> BranchNamingConvention:
        return self._naming.model_copy()

    @property
    def protected_branches(self) -> List[str]:
        """Names of branches protected by literal (non-regex) rules."""
        return [rule.pattern for rule in self._rules if not rule.is_regex]

    def get_protection_rule(self, branch_name: str) -> Optional[BranchProtectionRule]:
        """Return the first rule matching the branch, if any."""
        return next((rule for rule in self._rules if rule.matches(branch_name)), None)

    def is_protected(self, branch_name: str) -> bool:
        return self.get_protection_rule(branch_name) is not None

    def add_protection_rule(self, rule: BranchProtectionRule) -> None:
        """Add a rule, replacing any existing rule for the same pattern."""
        self._rules = [r for r in self._rules if r.pattern != rule.pattern]
        self._rules.append(rule)

    def remove_protection_rule(self, pattern: str) -> None:
        self._rules = [r for r in self._rules if r.pattern != pattern]

    def update_naming_convention(self, **changes: Any) -> None:
        """Update naming convention fields; values are validated like config input."""
        self._naming = BranchNamingConvention.model_validate({**self._naming.model_dump(), **changes})

    def validate_delete(self, branch_name: str) -> BranchOperationValidation:
        rule = self.get_protection_rule(branch_name)
        if rule and rule.prevent_delete:
            return BranchOperationValidation(
                allowed=False,
                rule=rule,
                reason=f"Branch '{branch_name}' is protected and cannot be deleted.",
            )
        return BranchOperationValidation(allowed=True)

    def validate_force_push(self, branch_name: str) -> BranchOperationValidation:
        rule = self.get_protection_rule(branch_name)
        if rule and rule.prevent_force_push:
            return BranchOperationValidation(
                allowed=False,
                rule=rule,
                reason=f"Force push to '{branch_name}' is not allowed. This branch is protected.",
            )
        return BranchOperationValidation(allowed=True)

    def validate_direct_push(self, branch_name: str) -> BranchOperationValidation:
        rule = self.get_protection_rule(branch_name)
        if rule and rule.require_pull_request:
            return BranchOperationValidation(
                allowed=False,
                rule=rule,
                reason=f"Direct push to '{branch_name}' is not allowed. Please create a pull request.",
                warnings=['This branch requires changes to be submitted via pull request.'],
            )
        return BranchOperationValidation(allowed=True)

    def validate_branch_name(self, branch_name: str) -> BranchOperationValidation:
        """Validate a new branch name against git's rules, then the naming convention."""
        name = (branch_name or '').strip()
        result = validate_branch_name(name, self.branch_options)
        if not result.valid:
            return BranchOperationValidation(allowed=False, reason=result.error)

        warnings = list(result.warnings)
        naming = self._naming

        if naming.enabled:
            if len(name) > naming.max_length:
                return BranchOperationValidation(
                    allowed=False,
                    reason=f'Branch name exceeds maximum length of {naming.max_length} characters.',
                )

            if not self._has_prefix(name):
                return BranchOperationValidation(
                    allowed=False,
                    reason=f"Branch name must start with one of: {', '.join(naming.prefixes)}",
                )

            if (naming.require_ticket_number and naming.ticket_pattern is not None
                    and not naming.ticket_pattern.search(name)):
                return BranchOperationValidation(
                    allowed=False,
                    reason=f'Branch name must include a ticket number (pattern: {naming.ticket_pattern.pattern})',
                )

            if not any(pattern.search(name) for pattern in naming.patterns):
                warnings.append('Branch name does not match the recommended naming pattern.')

        return BranchOperationValidation(allowed=True, warnings=warnings)

    def suggest_branch_name(self, text: str, branch_type: str = 'feature') -> str:
        """Suggest a conventional branch name for free text."""
        suggestion = sanitize_branch_name(text)
        if not suggestion:
            return suggestion

        if not self._has_prefix(suggestion) and branch_type in self._naming.prefixes:
            suggestion = f'{branch_type}{self._naming.separator}{suggestion}'

        if len(suggestion) > self._naming.max_length:
            suggestion = suggestion[:self._naming.max_length].rstrip('-./')

        return suggestion

    def _has_prefix(self, branch_name: str) -> bool:
        return any(
            branch_name.startswith(prefix + self._naming.separator)
            for prefix in self._naming.prefixes
        )
