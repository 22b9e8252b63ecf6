"""Root test configuration: source path and shared on-disk fixtures."""

# Standard Library
import sys
from pathlib import Path

# Third-Party
import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

TESTDATA_DIR = Path(__file__).resolve().parent / "testdata"


@pytest.fixture
def testdata_dir() -> Path:
    """Directory holding the .sql fixture trees."""

    return TESTDATA_DIR


@pytest.fixture
def write_sql(tmp_path):
    """Write a query file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
