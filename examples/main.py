"""Walk through the lookup forms against the example queries directory."""

# Standard Library
import logging
from pathlib import Path

# Third-Party
from sqlset.registry import load_registry

QUERIES_DIR = Path(__file__).resolve().parent / "queries"


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    registry = load_registry(QUERIES_DIR)

    print("GetUserByID (two identifiers):", registry.get("users", "GetUserByID"))
    print("CreateUser (dot notation):", registry.get("users.CreateUser"))
    print("CreateUser (single collection):", registry.get("CreateUser"))
    print("CreateUser (must_get):", registry.must_get("users", "CreateUser"))

    print("--------------------------------")
    for meta in registry.list_collection_metadata():
        print(f"Set ID: {meta.id}, Name: {meta.name}, Description: {meta.description}")

    print("Query IDs in 'users' set:", registry.list_statement_ids("users"))


if __name__ == "__main__":
    main()
