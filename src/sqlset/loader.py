"""Reads `.sql` files from a folder tree as (name, content) pairs."""

# Standard Library
from collections.abc import Iterator
from pathlib import Path, PurePath

EXTENSION = ".sql"


def is_query_file(name: str) -> bool:
    """Return True when the name carries the `.sql` extension, any case."""

    return name.lower().endswith(EXTENSION)


def collection_id_from_name(name: str) -> str:
    """Derive the default collection id from a file name.

    Args:
        name: File name, optionally with a relative path (e.g. "sub/Users.SQL").

    Returns:
        str: Lower-cased base name without the extension (e.g. "users").
    """

    return PurePath(name).name.lower().removesuffix(EXTENSION)


def iter_sources(root: Path | str) -> Iterator[tuple[str, bytes]]:
    """Yield every query file below root with its raw content.

    Files are visited in sorted path order so repeated loads register
    collections in the same order.

    Args:
        root: Base directory, searched recursively.

    Returns:
        Iterator of (relative posix path, file bytes).
    """

    base = Path(root)
    for path in sorted(base.rglob("*")):
        if not path.is_file() or not is_query_file(path.name):
            continue
        yield path.relative_to(base).as_posix(), path.read_bytes()
