"""
Randomized insert/delete sequences checked against the tree invariants.
"""

import random

import pytest

from bpindex.tree import BPlusTree, validate_tree

FANOUTS = [3, 4, 5, 6, 7]


class TestRandomOperations:
    """Random workloads compared with a dict model."""

    @pytest.mark.parametrize("fanout", FANOUTS)
    def test_random_mixed_workload(self, fanout):
        """Test that every operation preserves invariants and contents."""
        rng = random.Random(1000 + fanout)
        tree = BPlusTree(fanout=fanout)
        model: dict[int, int] = {}

        for step in range(1500):
            key = rng.randrange(300)
            before = tree.height

            if rng.random() < 0.6:
                tree.insert(key, step)
                model[key] = step
                assert before <= tree.height <= before + 1
            else:
                removed = tree.delete(key)
                assert removed == (model.pop(key, None) is not None)
                assert before - 1 <= tree.height <= before

            validate_tree(tree)

        assert list(tree) == sorted(model.items())
        for key, value in model.items():
            assert tree.get(key) == value

    @pytest.mark.parametrize("fanout", FANOUTS)
    def test_fill_then_drain_randomly(self, fanout):
        """Test that draining in random order ends with an empty tree."""
        rng = random.Random(fanout)
        keys = list(range(500))
        rng.shuffle(keys)

        tree = BPlusTree(fanout=fanout)
        for key in keys:
            tree.insert(key, str(key))
        validate_tree(tree)
        assert [k for k, _ in tree] == list(range(500))

        rng.shuffle(keys)
        remaining = set(keys)
        for key in keys:
            assert tree.delete(key)
            remaining.discard(key)
            validate_tree(tree)
            assert tree.size() == len(remaining)

        assert tree.root is None

    @pytest.mark.parametrize("fanout", FANOUTS)
    def test_string_keys(self, fanout):
        """Test random string keys."""
        rng = random.Random(fanout * 31)
        tree = BPlusTree(fanout=fanout)
        model: dict[str, int] = {}

        for step in range(600):
            key = "".join(rng.choice("abcdef") for _ in range(3))
            if rng.random() < 0.7:
                tree.insert(key, step)
                model[key] = step
            else:
                tree.delete(key)
                model.pop(key, None)
            validate_tree(tree)

        assert list(tree) == sorted(model.items())

    def test_clone_snapshots_survive_random_mutation(self):
        """Test that clones taken mid-workload keep their contents."""
        rng = random.Random(7)
        tree = BPlusTree(fanout=4)
        model: dict[int, None] = {}
        history = []

        for _ in range(300):
            key = rng.randrange(100)
            if rng.random() < 0.6:
                tree.insert(key, None)
                model[key] = None
            else:
                tree.delete(key)
                model.pop(key, None)
            history.append((tree.clone(), sorted(model)))

        for clone, expected in history:
            validate_tree(clone)
            assert [k for k, _ in clone] == expected
