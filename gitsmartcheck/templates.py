"""Commit message templates."""
import re
from re import Pattern
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from .commit_message import CommitMessageValidator, generate_conventional_commit, parse_conventional_commit
from .models import DEFAULT_COMMIT_TYPES, CommitMessageOptions, ValidationResult
from .rules import ISSUE_REFERENCE_PATTERN

PLACEHOLDER_PATTERN = re.compile(r'\{\{(\w+)\}\}')


class TemplatePlaceholder(BaseModel):
    key: str
    label: str
    description: Optional[str] = None
    required: bool = False
    default_value: Optional[str] = None
    options: Optional[List[str]] = None
    validation: Optional[Pattern] = Field(default=None, description="Regex the value must match")


class CommitTemplate(BaseModel):
    """A commit message layout with ``{{key}}`` placeholders."""

    id: str
    name: str
    description: Optional[str] = None
    template: str
    placeholders: List[TemplatePlaceholder] = Field(default_factory=list)
    is_default: bool = False
    category: Optional[str] = None


class ParsedCommitMessage(BaseModel):
    """Editable fields of a commit message, conventional or not."""

    type: Optional[str] = None
    scope: Optional[str] = None
    subject: str
    body: Optional[str] = None
    footer: Optional[str] = None
    breaking: bool = False
    issues: List[str] = Field(default_factory=list)


def _type_placeholder(options: Optional[List[str]] = None, default_value: Optional[str] = None) -> TemplatePlaceholder:
    return TemplatePlaceholder(
        key='type',
        label='Type',
        required=True,
        options=options or list(DEFAULT_COMMIT_TYPES),
        default_value=default_value,
    )


DEFAULT_TEMPLATES = [
    CommitTemplate(
        id='conventional-basic',
        name='Basic Conventional Commit',
        description='Simple conventional commit format',
        template='{{type}}: {{subject}}',
        placeholders=[
            _type_placeholder(),
            TemplatePlaceholder(key='subject', label='Subject',
                                description='Short description of the change', required=True),
        ],
        is_default=True,
        category='Conventional Commits',
    ),
    CommitTemplate(
        id='conventional-scope',
        name='Conventional Commit with Scope',
        description='Conventional commit with optional scope',
        template='{{type}}({{scope}}): {{subject}}',
        placeholders=[
            _type_placeholder(),
            TemplatePlaceholder(key='scope', label='Scope', description='Component or area affected'),
            TemplatePlaceholder(key='subject', label='Subject', required=True),
        ],
        category='Conventional Commits',
    ),
    CommitTemplate(
        id='conventional-full',
        name='Full Conventional Commit',
        description='Complete conventional commit with body and footer',
        template='{{type}}({{scope}}): {{subject}}\n\n{{body}}\n\n{{footer}}',
        placeholders=[
            _type_placeholder(),
            TemplatePlaceholder(key='scope', label='Scope'),
            TemplatePlaceholder(key='subject', label='Subject', required=True),
            TemplatePlaceholder(key='body', label='Body', description='Detailed description of the change'),
            TemplatePlaceholder(key='footer', label='Footer', description='BREAKING CHANGE or issue references'),
        ],
        category='Conventional Commits',
    ),
    CommitTemplate(
        id='breaking-change',
        name='Breaking Change',
        description='Commit with breaking change indicator',
        template='{{type}}({{scope}})!: {{subject}}\n\nBREAKING CHANGE: {{breakingDescription}}\n\n{{body}}',
        placeholders=[
            _type_placeholder(['feat', 'fix', 'refactor'], default_value='feat'),
            TemplatePlaceholder(key='scope', label='Scope'),
            TemplatePlaceholder(key='subject', label='Subject', required=True),
            TemplatePlaceholder(key='breakingDescription', label='Breaking Change Description',
                                description='Describe the breaking change', required=True),
            TemplatePlaceholder(key='body', label='Additional Details'),
        ],
        category='Breaking Changes',
    ),
    CommitTemplate(
        id='issue-fix',
        name='Fix Issue',
        description='Commit that fixes an issue',
        template='fix({{scope}}): {{subject}}\n\nFixes #{{issueNumber}}\n\n{{body}}',
        placeholders=[
            TemplatePlaceholder(key='scope', label='Scope'),
            TemplatePlaceholder(key='subject', label='Subject', required=True),
            TemplatePlaceholder(key='issueNumber', label='Issue Number', required=True,
                                validation=re.compile(r'\d+')),
            TemplatePlaceholder(key='body', label='Additional Details'),
        ],
        category='Issue Tracking',
    ),
    CommitTemplate(
        id='co-authored',
        name='Co-Authored Commit',
        description='Commit with co-authors',
        template='{{type}}: {{subject}}\n\n{{body}}\n\nCo-authored-by: {{coAuthor}}',
        placeholders=[
            _type_placeholder(['feat', 'fix', 'docs', 'refactor']),
            TemplatePlaceholder(key='subject', label='Subject', required=True),
            TemplatePlaceholder(key='body', label='Body'),
            TemplatePlaceholder(key='coAuthor', label='Co-Author', description='Format: Name <email>',
                                required=True),
        ],
        category='Collaboration',
    ),
    CommitTemplate(
        id='release',
        name='Release Commit',
        description='Version release commit',
        template='chore(release): v{{version}}\n\n{{changelog}}\n\nSigned-off-by: {{author}}',
        placeholders=[
            TemplatePlaceholder(key='version', label='Version', description='Semantic version (e.g., 1.2.3)',
                                required=True, validation=re.compile(r'\d+\.\d+\.\d+')),
            TemplatePlaceholder(key='changelog', label='Changelog', description='Brief changelog'),
            TemplatePlaceholder(key='author', label='Signed-off-by'),
        ],
        category='Release',
    ),
]


class CommitTemplateManager:
    """Catalog of commit templates plus the operations commit dialogs need."""

    def __init__(
        self,
        custom_templates: Optional[List[CommitTemplate]] = None,
        options: Optional[CommitMessageOptions] = None,
    ):
        self._custom_templates = list(custom_templates or [])
        self.validator = CommitMessageValidator(options)

    @property
    def templates(self) -> List[CommitTemplate]:
        """Built-in templates followed by custom ones."""
        return DEFAULT_TEMPLATES + self._custom_templates

    def templates_by_category(self) -> Dict[str, List[CommitTemplate]]:
        by_category: Dict[str, List[CommitTemplate]] = {}
        for template in self.templates:
            by_category.setdefault(template.category or 'Other', []).append(template)
        return by_category

    def get_template(self, template_id: str) -> Optional[CommitTemplate]:
        return next((t for t in self.templates if t.id == template_id), None)

    def get_default_template(self) -> Optional[CommitTemplate]:
        return next((t for t in self.templates if t.is_default), None)

    def add_custom_template(self, template: CommitTemplate) -> None:
        """Add a custom template, replacing one with the same id."""
        self._custom_templates = [t for t in self._custom_templates if t.id != template.id]
        self._custom_templates.append(template)

    def remove_custom_template(self, template_id: str) -> None:
        self._custom_templates = [t for t in self._custom_templates if t.id != template_id]

    def validate_values(self, template: CommitTemplate, values: Mapping[str, str]) -> ValidationResult:
        """Check placeholder values: required ones present, options and patterns respected."""
        for placeholder in template.placeholders:
            value = values.get(placeholder.key) or ''
            if not value:
                if placeholder.required:
                    return ValidationResult.failure(f'{placeholder.label} is required')
                continue

            if placeholder.options and value not in placeholder.options:
                return ValidationResult.failure(
                    f"{placeholder.label} must be one of: {', '.join(placeholder.options)}"
                )

            if placeholder.validation is not None and not placeholder.validation.search(value):
                return ValidationResult.failure(f'{placeholder.label} format is invalid')

        return ValidationResult(valid=True)

    def fill_template(self, template: CommitTemplate, values: Mapping[str, str]) -> str:
        """Substitute placeholder values and tidy up what empty values leave behind."""
        result = PLACEHOLDER_PATTERN.sub(lambda m: values.get(m.group(1)) or '', template.template)
        result = result.replace('()', '')
        result = re.sub(r'\n{3,}', '\n\n', result)
        return result.strip()

    def validate_message(self, message: str) -> ValidationResult:
        return self.validator.validate(message)

    def parse_message(self, message: str) -> ParsedCommitMessage:
        """Split a message into editable fields, falling back to subject/body for freeform text."""
        parsed = parse_conventional_commit(message)
        if parsed:
            return ParsedCommitMessage(
                type=parsed.type,
                scope=parsed.scope,
                subject=parsed.description,
                body=parsed.body,
                footer=parsed.footer,
                breaking=parsed.breaking,
                issues=ISSUE_REFERENCE_PATTERN.findall(message),
            )

        lines = (message or '').split('\n')
        body = '\n'.join(lines[2:]).strip() if len(lines) > 2 else ''
        return ParsedCommitMessage(
            subject=lines[0],
            body=body or None,
            breaking='breaking change' in (message or '').lower(),
        )

    def generate_from_context(
        self,
        description: str,
        commit_type: str = 'feat',
        scope: Optional[str] = None,
        breaking: bool = False,
        issues: Optional[List[str]] = None,
    ) -> str:
        """Build a message whose footer closes the given issues."""
        footer = '\n'.join(f'Fixes #{issue}' for issue in issues or [])
        return generate_conventional_commit(
            commit_type, scope, description, breaking=breaking, footer=footer or None
        )
