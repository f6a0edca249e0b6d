"""Conventional Commits message generation."""
from typing import Optional


def generate_conventional_commit(
    commit_type: str,
    scope: Optional[str],
    description: str,
    body: Optional[str] = None,
    breaking: bool = False,
    footer: Optional[str] = None,
) -> str:
    """Build a ``type(scope)!: description`` message with optional body and footer.

    This is the inverse of :func:`parse_conventional_commit`: parsing the
    result gives back the same type, scope, breaking flag, description, body
    and footer, up to surrounding whitespace.
    """
    message = commit_type

    if scope:
        message += f'({scope})'

    if breaking:
        message += '!'

    message += f': {description}'

    if body:
        message += f'\n\n{body}'

    if footer:
        message += f'\n\n{footer}'

    return message
