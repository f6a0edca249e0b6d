"""Conventional Commits parsing."""
from typing import List, Optional

from ..models import ParsedConventionalCommit
from ..rules import CONVENTIONAL_COMMIT_PATTERN, FOOTER_TOKEN_PATTERN


def _joined(lines: List[str]) -> Optional[str]:
    text = '\n'.join(lines).strip()
    return text or None


def parse_conventional_commit(message: str) -> Optional[ParsedConventionalCommit]:
    """Parse a Conventional Commits message into its parts.

    Returns None when the subject does not follow the ``type(scope)!: description``
    grammar; that is a normal outcome, not an error. Line 2 is the blank
    separator and is skipped. From line 3 on, the first line that looks like a
    trailer (``Token: value`` or ``Token #ref``) starts the footer, and every
    line after it belongs to the footer too.

    The trailer heuristic is loose: a body line such as ``Note: see below``
    also starts the footer, while ``BREAKING CHANGE: ...`` does not, since the
    token contains a space.
    """
    lines = (message or '').split('\n')
    match = CONVENTIONAL_COMMIT_PATTERN.match(lines[0])
    if not match:
        return None

    commit_type, scope, breaking, description = match.groups()

    body_lines: List[str] = []
    footer_lines: List[str] = []
    in_footer = False
    for line in lines[2:]:
        if FOOTER_TOKEN_PATTERN.match(line):
            in_footer = True
        if in_footer:
            footer_lines.append(line)
        else:
            body_lines.append(line)

    return ParsedConventionalCommit(
        type=commit_type,
        scope=scope,
        breaking=breaking == '!',
        description=description,
        body=_joined(body_lines),
        footer=_joined(footer_lines),
    )
