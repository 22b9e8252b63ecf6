"""Registry of parsed collections and the statement resolution engine."""

# Standard Library
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

# Local
from .collection import Collection
from .config import resolve_queries_dir
from .errors import (
    ArgumentEmptyError,
    CollectionNotFoundError,
    InvalidArgumentCountError,
    InvalidSyntaxError,
    RegistryEmptyError,
    RequiredArgumentMissingError,
    SQLSetError,
    UnresolvedStatementError,
)
from .loader import is_query_file, iter_sources
from .meta import CollectionMeta
from .parser import parse

logger = logging.getLogger(__name__)

SEPARATOR = "."


class Registry:
    """Read-only mapping from collection id to Collection.

    Build it with build_registry() or load_registry(); nothing mutates it
    afterwards, so it can be shared between threads without locking.
    """

    def __init__(self, collections: Mapping[str, Collection]) -> None:
        self._collections = MappingProxyType(dict(collections))

    def __repr__(self) -> str:
        return f"Registry(collections={sorted(self._collections)!r})"

    def __len__(self) -> int:
        return len(self._collections)

    def __contains__(self, collection_id: object) -> bool:
        return collection_id in self._collections

    def __getitem__(self, key: str | tuple[str, ...]) -> str:
        """Resolve ``registry["set.query"]`` or ``registry["set", "query"]``."""

        if isinstance(key, tuple):
            return self.get(*key)
        return self.get(key)

    def collection(self, collection_id: str) -> Collection:
        """Return a collection by id.

        Raises:
            CollectionNotFoundError: If no collection has this id.
        """

        try:
            return self._collections[collection_id]
        except KeyError:
            raise CollectionNotFoundError(collection_id) from None

    def get(self, *identifiers: str) -> str:
        """Resolve statement text from one or two identifiers.

        Accepted forms:
            get("set", "query")
            get("set.query") - split on the first separator
            get("query") - only when exactly one collection is registered

        Args:
            *identifiers: Collection and statement identifiers.

        Returns:
            Statement text.

        Raises:
            ArgumentEmptyError: If any identifier is empty.
            InvalidArgumentCountError: If not given one or two identifiers.
            CollectionNotFoundError: If the collection is unknown.
            StatementNotFoundError: If the statement is unknown.
            RegistryEmptyError: If a bare statement id is used on an empty registry.
            RequiredArgumentMissingError: If a bare statement id is ambiguous.
        """

        for index, identifier in enumerate(identifiers):
            if not identifier:
                raise ArgumentEmptyError(index)

        if len(identifiers) == 2:
            collection_id, statement_id = identifiers
            return self.collection(collection_id).get(statement_id)

        if len(identifiers) != 1:
            raise InvalidArgumentCountError(len(identifiers))

        identifier = identifiers[0]
        if SEPARATOR in identifier:
            collection_id, statement_id = identifier.split(SEPARATOR, 1)
            return self.collection(collection_id).get(statement_id)

        if not self._collections:
            raise RegistryEmptyError()
        if len(self._collections) > 1:
            raise RequiredArgumentMissingError(identifier)

        (only,) = self._collections.values()
        return only.get(identifier)

    def must_get(self, *identifiers: str) -> str:
        """Resolve like get() but treat any failure as a programming error.

        Raises:
            UnresolvedStatementError: Wrapping the underlying SQLSetError.
        """

        try:
            return self.get(*identifiers)
        except SQLSetError as exc:
            logger.error("Unresolvable statement %r: %s", identifiers, exc)
            raise UnresolvedStatementError(str(exc)) from exc

    def list_collection_metadata(self) -> list[CollectionMeta]:
        """Return metadata for every registered collection, in no set order."""

        return [c.meta for c in self._collections.values()]

    def list_statement_ids(self, collection_id: str) -> list[str]:
        """Return sorted statement ids of a collection.

        Raises:
            CollectionNotFoundError: If the collection is unknown.
        """

        return self.collection(collection_id).statement_ids()


# --- Construction ---


def _decode(name: str, content: str | bytes) -> str:
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidSyntaxError(f"File is not valid UTF-8: {exc}", name) from exc


def build_registry(sources: Iterable[tuple[str, str | bytes]]) -> Registry:
    """Parse every query source into a new Registry.

    Sources whose name lacks the `.sql` extension are skipped. The first
    parse failure aborts the whole build; no partial registry is returned.

    Args:
        sources: (file name, content) pairs.

    Returns:
        Registry keyed by each collection's metadata id.

    Raises:
        InvalidSyntaxError: If any source is malformed.
        LineTooLongError: If any source has an over-long line.
    """

    collections: dict[str, Collection] = {}

    for name, content in sources:
        if not is_query_file(name):
            continue
        try:
            parsed = parse(name, _decode(name, content))
        except SQLSetError as exc:
            logger.error("Failed to build registry: %s", exc)
            raise

        collection_id = parsed.meta.id
        if collection_id in collections:
            logger.warning(
                "%s: collection '%s' replaces an earlier one", name, collection_id
            )
        collections[collection_id] = parsed
        logger.debug(
            "Parsed %s as '%s' with %d statements", name, collection_id, len(parsed)
        )

    logger.info("Built registry with %d collections", len(collections))
    return Registry(collections)


def load_registry(root: Path | str | None = None) -> Registry:
    """Build a Registry from every `.sql` file below a directory.

    Args:
        root: Queries directory; defaults to the SQLSET_DIR environment variable.

    Returns:
        Populated Registry.
    """

    return build_registry(iter_sources(resolve_queries_dir(root)))
