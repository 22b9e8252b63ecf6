"""Block parser turning query file content into a Collection.

The parser is a small state machine: it is either idle, inside a statement
block or inside the metadata block. Blocks never nest, every opened block
must be closed before the next opens, and the file must end idle.
"""

# Standard Library
import logging
from dataclasses import dataclass, field

# Local
from .collection import Collection
from .errors import InvalidSyntaxError, LineTooLongError
from .loader import collection_id_from_name
from .meta import decode_meta
from .tokens import (
    BLANK,
    COMMENT,
    CONTENT,
    END,
    META,
    META_KEYWORD,
    OPENING_KINDS,
    STATEMENT,
    STATEMENT_KEYWORD,
    Token,
    classify,
)

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 1024
LINE_ENDING = "\n"


# --- Parser States ---


@dataclass
class Idle:
    """No block is open."""


@dataclass
class InStatement:
    """Inside ``--SQL:<identifier>``, collecting statement text."""

    identifier: str
    opened_at: int
    body: list[str] = field(default_factory=list)

    def describe(self) -> str:
        return f"{STATEMENT_KEYWORD}:{self.identifier}"


@dataclass
class InMeta:
    """Inside ``--META``, collecting the raw metadata payload."""

    opened_at: int
    body: list[str] = field(default_factory=list)

    def describe(self) -> str:
        return META_KEYWORD


State = Idle | InStatement | InMeta


# --- Parsing ---


def _split_lines(content: str) -> list[str]:
    return [line.removesuffix("\r") for line in content.split("\n")]


def _check_length(source: str, line_no: int, raw: str) -> None:
    if len(raw.encode("utf-8")) > MAX_LINE_LENGTH:
        raise LineTooLongError(
            f"Line longer than {MAX_LINE_LENGTH} bytes, possible corruption",
            source,
            line_no,
        )


def _open(
    token: Token, state: State, seen_meta: bool, source: str, line_no: int
) -> State:
    if not isinstance(state, Idle):
        raise InvalidSyntaxError(
            f"Unexpected {token.kind} block while {state.describe()} is open",
            source,
            line_no,
        )
    if token.kind == STATEMENT:
        return InStatement(token.identifier, line_no)
    if seen_meta:
        raise InvalidSyntaxError("Unexpected multiple metadata", source, line_no)
    return InMeta(line_no)


def parse(source: str, content: str) -> Collection:
    """Parse one query file.

    Args:
        source: File name, used for the default collection id and errors.
        content: Full file content.

    Returns:
        Collection with decoded metadata and all statements.

    Raises:
        InvalidSyntaxError: On misplaced, unclosed or malformed directives.
        LineTooLongError: If any line exceeds MAX_LINE_LENGTH bytes.
    """

    state: State = Idle()
    statements: dict[str, str] = {}
    meta_payload: str | None = None

    for line_no, raw in enumerate(_split_lines(content), start=1):
        _check_length(source, line_no, raw)

        line = raw.strip()
        try:
            token = classify(line)
        except InvalidSyntaxError as exc:
            raise InvalidSyntaxError(exc.message, source, line_no) from None

        if token.kind in (BLANK, COMMENT):
            continue

        if token.kind in OPENING_KINDS:
            state = _open(token, state, meta_payload is not None, source, line_no)
            continue

        if token.kind == END:
            if isinstance(state, InStatement):
                if state.identifier in statements:
                    logger.warning(
                        "%s:%d: statement '%s' redefined",
                        source,
                        line_no,
                        state.identifier,
                    )
                statements[state.identifier] = "".join(state.body).removesuffix(
                    LINE_ENDING
                )
            elif isinstance(state, InMeta):
                meta_payload = "".join(state.body)
            else:
                raise InvalidSyntaxError(
                    f"Unexpected '{token.kind}' with no open block", source, line_no
                )
            state = Idle()
            continue

        if token.kind == CONTENT and not isinstance(state, Idle):
            state.body.append(line + LINE_ENDING)

    if not isinstance(state, Idle):
        raise InvalidSyntaxError(
            f"No closing tag found for '{state.describe()}'",
            source,
            state.opened_at,
        )

    try:
        meta = decode_meta(collection_id_from_name(source), meta_payload)
    except InvalidSyntaxError as exc:
        raise InvalidSyntaxError(exc.message, source) from exc

    return Collection(meta, statements)
