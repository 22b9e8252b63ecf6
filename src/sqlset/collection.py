"""Parsed content of a single query file."""

# Standard Library
from collections.abc import Mapping
from types import MappingProxyType

# Local
from .errors import StatementNotFoundError
from .meta import CollectionMeta


class Collection:
    """Metadata plus named statements from one source.

    Instances are read-only once created by the parser.
    """

    def __init__(self, meta: CollectionMeta, statements: Mapping[str, str]) -> None:
        self._meta = meta
        self._statements = MappingProxyType(dict(statements))

    def __repr__(self) -> str:
        return f"Collection(id={self._meta.id!r}, statements={len(self)})"

    def __len__(self) -> int:
        return len(self._statements)

    def __contains__(self, statement_id: object) -> bool:
        return statement_id in self._statements

    @property
    def meta(self) -> CollectionMeta:
        return self._meta

    @property
    def statements(self) -> Mapping[str, str]:
        return self._statements

    def get(self, statement_id: str) -> str:
        """Return statement text by identifier.

        Raises:
            StatementNotFoundError: If the identifier is unknown.
        """

        try:
            return self._statements[statement_id]
        except KeyError:
            raise StatementNotFoundError(self._meta.id, statement_id) from None

    def statement_ids(self) -> list[str]:
        """Return statement identifiers in ascending order."""

        return sorted(self._statements)
