"""Git naming rules shared by the validators and the sanitizer."""
import re

DEFAULT_MAX_LENGTH = 250
DEFAULT_RESERVED_NAMES = ('HEAD', 'FETCH_HEAD', 'ORIG_HEAD', 'MERGE_HEAD', 'CHERRY_PICK_HEAD')
STANDARD_REMOTE_NAMES = ('origin', 'upstream', 'fork')
MAX_STASH_MESSAGE_LENGTH = 500

# Characters git refuses in ref names, as shown to users
FORBIDDEN_CHARS = '~ ^ : ? * [ ] @ { \\'

FORBIDDEN_CHARS_PATTERN = re.compile(r'[~^:?*\[\]@{\\]')
REMOTE_FORBIDDEN_CHARS_PATTERN = re.compile(r'[~^:?*\[\]@{\\/]')
CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x1f\x7f]')
WHITESPACE_PATTERN = re.compile(r'\s')
UPPERCASE_PATTERN = re.compile(r'[A-Z]')
PATH_TRAVERSAL_PATTERN = re.compile(r'(^|/)\.\.($|/)')

SEMVER_PATTERN = re.compile(r'^v?\d+\.\d+\.\d+(-[\w.]+)?(\+[\w.]+)?$', re.ASCII)

HTTP_URL_PATTERN = re.compile(r'^https?://[^\s]+\.git$', re.IGNORECASE)
SSH_SHORTHAND_PATTERN = re.compile(r'^[\w.-]+@[^\s:]+:[^\s]+\.git$', re.IGNORECASE)
SSH_URL_PATTERN = re.compile(r'^ssh://[^\s]+\.git$', re.IGNORECASE)
GIT_URL_PATTERN = re.compile(r'^git://[^\s]+\.git$', re.IGNORECASE)
FILE_URL_PATTERN = re.compile(r'^(file://)?/[^\s]+$', re.IGNORECASE)

# type(scope)!: description
CONVENTIONAL_COMMIT_PATTERN = re.compile(r'^(\w+)(?:\(([^)]+)\))?(!)?:\s*(.+)$', re.ASCII)

# "Token: value" or "Token #123" lines start the footer
FOOTER_TOKEN_PATTERN = re.compile(r'^[\w-]+:\s|^[\w-]+\s#', re.ASCII)

ISSUE_REFERENCE_PATTERN = re.compile(r'#(\d+)')
