"""Error kinds raised while parsing query files and resolving statements."""


class SQLSetError(Exception):
    """Base class for every recoverable sqlset error."""


# --- Empty ---


class EmptyError(SQLSetError):
    """Something that must hold entries holds none."""


class RegistryEmptyError(EmptyError):
    """The registry has no collections to resolve against."""

    def __init__(self) -> None:
        super().__init__("Registry is empty")


class ArgumentEmptyError(EmptyError, ValueError):
    """An identifier passed to a lookup is an empty string."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Argument {index} is empty")


# --- Not Found ---


class NotFoundError(SQLSetError, LookupError):
    """A collection or statement does not exist."""


class CollectionNotFoundError(NotFoundError):
    """No collection is registered under the identifier."""

    def __init__(self, collection_id: str) -> None:
        self.collection_id = collection_id
        super().__init__(f"Collection not found: {collection_id}")


class StatementNotFoundError(NotFoundError):
    """The collection has no statement with the identifier."""

    def __init__(self, collection_id: str, statement_id: str) -> None:
        self.collection_id = collection_id
        self.statement_id = statement_id
        super().__init__(f"Statement not found: {collection_id}.{statement_id}")


# --- Parsing ---


class ParseError(SQLSetError):
    """A query file could not be parsed.

    Args:
        message: What went wrong.
        source: Name of the file being parsed.
        line: 1-based line number, or None when no single line is at fault.
    """

    def __init__(
        self, message: str, source: str | None = None, line: int | None = None
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        location = [str(part) for part in (self.source, self.line) if part]
        if not location:
            return self.message
        return f"{':'.join(location)}: {self.message}"


class InvalidSyntaxError(ParseError, ValueError):
    """Malformed directive, misplaced block or bad metadata payload."""


class LineTooLongError(ParseError):
    """A line exceeds the maximum length, likely a corrupted file."""


# --- Arguments ---


class InvalidArgumentCountError(SQLSetError, TypeError):
    """A lookup received neither one nor two identifiers."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Expected 1 or 2 identifiers, got {count}")


class RequiredArgumentMissingError(SQLSetError, ValueError):
    """A bare statement identifier is ambiguous across several collections."""

    def __init__(self, statement_id: str) -> None:
        self.statement_id = statement_id
        super().__init__(
            f"Collection identifier required for '{statement_id}': "
            "more than one collection is registered"
        )


class UnresolvedStatementError(RuntimeError):
    """Raised by ``Registry.must_get`` when a lookup fails.

    Not a SQLSetError: a missing statement at a must_get call site is a
    programming error and should not be handled like a runtime condition.
    """
