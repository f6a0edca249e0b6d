"""Branch name sanitization."""
import re

from ..rules import CONTROL_CHARS_PATTERN, DEFAULT_MAX_LENGTH, DEFAULT_RESERVED_NAMES, FORBIDDEN_CHARS_PATTERN

_WHITESPACE_RUN = re.compile(r'\s+')
_UNDERSCORE_RUN = re.compile(r'_+')
_DOT_RUN = re.compile(r'\.{2,}')
_SLASH_RUN = re.compile(r'/{2,}')
_ISSUE_MARKER = re.compile(r'#')
_LEADING_SEPARATORS = re.compile(r'^[-./]+')
_TRAILING_SEPARATORS = re.compile(r'[-./]+$')

LOCK_SUFFIX = '.lock'
RESERVED_SUFFIX = '-branch'


def _strip_trailing(name: str) -> str:
    return _TRAILING_SEPARATORS.sub('', name)


def sanitize_branch_name(name: str) -> str:
    """Turn arbitrary text into a branch name that passes validate_branch_name.

    The transforms run in a fixed order since later ones rely on earlier
    ones, e.g. dots are collapsed only after forbidden characters between
    them are gone. The result may be empty; a non-empty result is always a
    valid name under the default options, and sanitizing it again returns it
    unchanged.
    """
    result = (name or '').strip().lower()
    result = _WHITESPACE_RUN.sub('-', result)
    result = _UNDERSCORE_RUN.sub('-', result)
    result = FORBIDDEN_CHARS_PATTERN.sub('', result)
    result = CONTROL_CHARS_PATTERN.sub('', result)
    result = _ISSUE_MARKER.sub('', result)
    result = _DOT_RUN.sub('.', result)
    result = _SLASH_RUN.sub('/', result)
    result = _LEADING_SEPARATORS.sub('', result)
    result = _strip_trailing(result)
    result = _strip_trailing(result[:DEFAULT_MAX_LENGTH])

    while result.endswith(LOCK_SUFFIX):
        result = _strip_trailing(result[:-len(LOCK_SUFFIX)])

    if result and result.upper() in DEFAULT_RESERVED_NAMES:
        result += RESERVED_SUFFIX

    return result
