"""
Shared pytest fixtures for the B+-tree index tests.
"""

import pytest

from bpindex.tree import BPlusTree


@pytest.fixture
def tree():
    """Provide an empty tree with the smallest legal fanout."""
    return BPlusTree(fanout=3)


@pytest.fixture
def five_key_tree():
    """Provide a fanout-3 tree holding keys 1..5 inserted in order."""
    t = BPlusTree(fanout=3)
    for key in range(1, 6):
        t.insert(key, f"v{key}")
    return t


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return [
        ("key1", "value1"),
        ("key2", "value2"),
        ("key3", "value3"),
    ]


@pytest.fixture
def large_sample_entries():
    """Provide larger sample for stress testing."""
    return [(f"key{i:04d}", f"value{i}") for i in range(1000)]


@pytest.fixture
def script_path(tmp_path):
    """Provide a replay script on disk."""
    path = tmp_path / "input.txt"
    path.write_text(
        "# build then shrink\n"
        "insert 1\n"
        "insert 2\n"
        "insert 3\n"
        "insert 4\n"
        "insert 5\n"
        "\n"
        "delete 4\n"
        "delete 5\n",
        encoding="utf-8",
    )
    return path
