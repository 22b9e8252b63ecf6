"""Environment configuration for locating the queries directory."""

# Standard Library
import os
from pathlib import Path

# Third-Party
from dotenv import load_dotenv

QUERIES_DIR_ENV = "SQLSET_DIR"


def resolve_queries_dir(root: Path | str | None = None) -> Path:
    """Return the queries directory from an explicit root or the environment.

    Args:
        root: Explicit directory; takes precedence over SQLSET_DIR.

    Returns:
        Path to an existing directory.

    Raises:
        ValueError: If no root is given and SQLSET_DIR is not set.
        FileNotFoundError: If the directory does not exist.
    """

    if root is None:
        load_dotenv()
        root = os.getenv(QUERIES_DIR_ENV)
        if not root:
            raise ValueError(f"{QUERIES_DIR_ENV} is required")

    path = Path(root)
    if not path.is_dir():
        raise FileNotFoundError(f"Queries directory not found: {path}")
    return path
