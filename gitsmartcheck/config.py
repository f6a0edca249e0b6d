"""Configuration management for git-smart-check.

Settings live in ``.gitsmartcheck.toml`` at the repository root::

    always_log = false

    [branch]
    allow_slash = true
    enforce_prefix = ["feature", "bugfix"]

    [commit]
    require_type = true
    allowed_scopes = ["api", "ui"]

    [[protection_rules]]
    pattern = "main"
    prevent_delete = true

``GIT_SMART_CHECK_*`` environment variables fill in values the file leaves
out; command line options override both.
"""
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError
import tomli
import tomli_w
import os
import re

from .models import ANY_COMMIT_TYPE, BranchValidationOptions, CommitMessageOptions
from .protection import BranchNamingConvention, BranchProtection, BranchProtectionRule, default_protection_rules
from .templates import CommitTemplate, CommitTemplateManager

DEFAULT_CONFIG_FILENAME = ".gitsmartcheck.toml"
LOG_FILE_TEMPLATE = "gsck_log-{timestamp}.log"

# Environment variable -> (section, field); section None means top level
ENV_MAPPING = {
    'GIT_SMART_CHECK_ALWAYS_LOG': (None, 'always_log'),
    'GIT_SMART_CHECK_LOG_FILE': (None, 'log_file'),
    'GIT_SMART_CHECK_MAX_BRANCH_LENGTH': ('branch', 'max_length'),
    'GIT_SMART_CHECK_BRANCH_PATTERN': ('branch', 'pattern'),
    'GIT_SMART_CHECK_MAX_SUBJECT_LENGTH': ('commit', 'max_subject_length'),
    'GIT_SMART_CHECK_MAX_BODY_LINE_LENGTH': ('commit', 'max_body_line_length'),
    'GIT_SMART_CHECK_REQUIRE_TYPE': ('commit', 'require_type'),
    'GIT_SMART_CHECK_REQUIRE_SCOPE': ('commit', 'require_scope'),
    'GIT_SMART_CHECK_NAMING_ENABLED': ('naming', 'enabled'),
}

BOOLEAN_FIELDS = {'always_log', 'require_type', 'require_scope', 'enabled'}
TRUE_VALUES = ('true', '1', 'yes', 'on')

MAX_LOG_PATH_LENGTH = 1000
_LOG_PATH_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
_SHELL_METACHARACTERS = re.compile(r'[;&|`$()]')
_SYSTEM_DIRECTORIES = re.compile(r'/(etc|var|usr|bin|sbin)/|C:\\(Windows|System|Program)', re.IGNORECASE)


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or holds invalid values."""


def clean_log_path(value: str) -> str:
    """Drop control characters and cut the path at the first shell metacharacter."""
    if not value:
        return value
    value = _LOG_PATH_CONTROL_CHARS.sub('', value)
    value = _SHELL_METACHARACTERS.split(value)[0]
    return value[:MAX_LOG_PATH_LENGTH].strip()


def is_safe_log_path(path: str) -> bool:
    """Log files must stay relative to the repository: no traversal, no system directories."""
    if not path or '..' in path or '\\' in path:
        return False
    if path.startswith('/') or os.path.isabs(path):
        return False
    return not _SYSTEM_DIRECTORIES.search(path)


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_var, (section, field_name) in ENV_MAPPING.items():
        if env_var not in os.environ:
            continue

        value: Any = os.environ[env_var]
        if field_name == 'log_file':
            value = clean_log_path(value)
        if field_name in BOOLEAN_FIELDS:
            value = value.lower() in TRUE_VALUES

        if section is None:
            overrides[field_name] = value
        else:
            overrides.setdefault(section, {})[field_name] = value
    return overrides


class Config(BaseModel):
    """Configuration settings for git-smart-check.

    Regex options are compiled when the configuration is built, so a bad
    pattern is reported here rather than on every validation call.
    """

    branch: BranchValidationOptions = Field(
        default_factory=BranchValidationOptions,
        description="Options for git's branch name rules"
    )

    commit: CommitMessageOptions = Field(
        default_factory=CommitMessageOptions,
        description="Options for commit message validation"
    )

    naming: BranchNamingConvention = Field(
        default_factory=BranchNamingConvention,
        description="Team naming convention for new branches"
    )

    protection_rules: List[BranchProtectionRule] = Field(
        default_factory=default_protection_rules,
        description="Protection rules, first match wins"
    )

    templates: List[CommitTemplate] = Field(
        default_factory=list,
        description="Custom commit templates, in addition to the built-in ones"
    )

    always_log: bool = Field(
        default=False,
        description="Write every run to a new timestamped log file"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Fixed log file, relative to the repository root"
    )

    def __init__(self, **data):
        env_data = _env_overrides()

        # Explicit values win; sections given as dicts are merged key by key
        merged = {**env_data, **data}
        for section, env_values in env_data.items():
            if isinstance(env_values, dict) and isinstance(data.get(section), dict):
                merged[section] = {**env_values, **data[section]}

        super().__init__(**merged)

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load the configuration of a repository.

        Args:
            repo_path: Repository root holding the config file

        Returns:
            Config: Values from the file, or defaults when there is no file

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid values
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        data: Dict[str, Any] = {}
        source = "environment"

        if config_path.exists():
            source = str(config_path)
            try:
                with config_path.open('rb') as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

            if isinstance(data.get('log_file'), str):
                log_file = clean_log_path(data['log_file'])
                if log_file and not is_safe_log_path(log_file):
                    print(f"Warning: Unsafe log file path '{log_file}', ignoring it")
                    log_file = None
                data['log_file'] = log_file or None

        # Environment overrides are validated here as well, file or not
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    def save(self, repo_path: Path) -> None:
        """Write the configuration to the repository's config file.

        Patterns are written back as their source strings; unset options are left out.
        A missing type allow-list is written as ``"*"`` so it does not come back
        as the default list.
        """
        data = self.model_dump(mode='json', exclude_none=True)
        if self.commit.allowed_types is None:
            data['commit']['allowed_types'] = ANY_COMMIT_TYPE

        if data.get('log_file') and not is_safe_log_path(data['log_file']):
            print(f"Warning: Unsafe log file path '{data['log_file']}', not saving it")
            del data['log_file']

        with (repo_path / DEFAULT_CONFIG_FILENAME).open('wb') as f:
            tomli_w.dump(data, f)

    def get_log_file(self) -> Optional[Path]:
        """Return the log file for this run, or None when logging is off.

        ``always_log`` takes precedence and yields a new timestamped file.
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(LOG_FILE_TEMPLATE.format(timestamp=timestamp))

        if not self.log_file:
            return None
        if not is_safe_log_path(self.log_file):
            print(f"Warning: Unsafe log file path '{self.log_file}', logging disabled")
            return None
        return Path(self.log_file)

    def create_protection(self) -> BranchProtection:
        """Build branch protection from the configured rules and convention."""
        return BranchProtection(
            rules=self.protection_rules,
            naming=self.naming,
            branch_options=self.branch,
        )

    def create_template_manager(self) -> CommitTemplateManager:
        """Build the template manager with custom templates and commit options."""
        return CommitTemplateManager(custom_templates=self.templates, options=self.commit)
