"""Line classification for the query file format.

A directive line starts with ``--``. After the marker, ``SQL:<id>`` opens a
statement block, ``META`` opens the metadata block and ``end`` closes the
open block. Any other directive is a plain comment. Lines without the marker
are block content.
"""

# Standard Library
from dataclasses import dataclass

# Local
from .errors import InvalidSyntaxError

MARKER = "--"
KEY_SEPARATOR = ":"
STATEMENT_KEYWORD = "SQL"
META_KEYWORD = "META"
END_KEYWORD = "end"

BLANK = "blank"
COMMENT = "comment"
STATEMENT = "statement"
META = "meta"
END = "end"
CONTENT = "content"

OPENING_KINDS = {STATEMENT, META}


@dataclass(frozen=True)
class Token:
    """A classified line; identifier is set for statement openers only."""

    kind: str
    identifier: str = ""


def classify(line: str) -> Token:
    """Classify one trimmed line.

    Args:
        line: Line content with surrounding whitespace removed.

    Returns:
        Token describing the line.

    Raises:
        InvalidSyntaxError: If a statement opener has no identifier.
    """

    if not line:
        return Token(BLANK)
    if not line.startswith(MARKER):
        return Token(CONTENT)

    directive = line[len(MARKER) :]

    statement_prefix = STATEMENT_KEYWORD + KEY_SEPARATOR
    if directive.startswith(statement_prefix):
        identifier = directive[len(statement_prefix) :].strip()
        if not identifier:
            raise InvalidSyntaxError("No statement identifier given")
        return Token(STATEMENT, identifier)

    if directive.startswith(META_KEYWORD):
        return Token(META)

    if directive.startswith(END_KEYWORD):
        return Token(END)

    return Token(COMMENT)
