# conftest.py  (tests/ at project root)
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent.resolve()

# Make the package importable without installing it
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from normstr import NormalizedString  # noqa: E402


def assert_consistent(ns: NormalizedString) -> None:
    """One alignment per normalized char, every span inside the original text."""
    assert len(ns.alignments) == len(ns.normalized)
    for start, end in ns.alignments:
        assert 0 <= start <= end <= len(ns.original)


@pytest.fixture
def consistent():
    return assert_consistent
