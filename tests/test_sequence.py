"""
Hashed Sequence Tests

Unit tests for the ordered, digest-caching item container trees are built from.
"""

import os
import sys
import unittest

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from hashtree import HashedSequence, Hasher, InvalidInputError, MerkleTree


class TestHashedSequence(unittest.TestCase):
    """
    Tests for insertion, removal, iteration and digest caching.
    """

    def setUp(self):
        self.hasher = Hasher("md5")

    def test_empty_sequence(self):
        seq = HashedSequence(hasher=self.hasher)
        self.assertEqual(len(seq), 0)
        self.assertEqual(list(seq), [])
        self.assertEqual(seq.hashes(), [])
        self.assertEqual(seq.describe(), "")

    def test_insertion_order(self):
        """Items keep their insertion order at both ends"""
        seq = HashedSequence(["b", "c"], hasher=self.hasher)
        seq.add_at_head("a")
        seq.add_at_tail("d")
        seq.append("e")
        self.assertEqual(list(seq), ["a", "b", "c", "d", "e"])
        self.assertEqual(len(seq), 5)

    def test_hashes_follow_items(self):
        seq = HashedSequence(["x", "y"], hasher=self.hasher)
        self.assertEqual(seq.hashes(), [self.hasher.digest_data("x"), self.hasher.digest_data("y")])

    def test_describe(self):
        seq = HashedSequence(["hello"], hasher=self.hasher)
        self.assertEqual(
            seq.describe(),
            "Item: hello, Digest: 5d41402abc4b2a76b9719d911017c592\n",
        )

    def test_remove_first_match_only(self):
        seq = HashedSequence(["a", "b", "a", "c"], hasher=self.hasher)
        self.assertTrue(seq.remove("a"))
        self.assertEqual(list(seq), ["b", "a", "c"])
        self.assertTrue(seq.remove("c"))
        self.assertEqual(list(seq), ["b", "a"])
        self.assertFalse(seq.remove("missing"))
        self.assertEqual(len(seq), 2)

    def test_remove_last_item(self):
        seq = HashedSequence(["only"], hasher=self.hasher)
        self.assertTrue(seq.remove("only"))
        self.assertEqual(len(seq), 0)
        self.assertFalse(seq.remove("only"))

    def test_none_items_rejected(self):
        seq = HashedSequence(hasher=self.hasher)
        with self.assertRaises(InvalidInputError):
            seq.add_at_tail(None)
        with self.assertRaises(InvalidInputError):
            seq.add_at_head(None)
        with self.assertRaises(InvalidInputError):
            seq.remove(None)
        with self.assertRaises(InvalidInputError):
            HashedSequence(["a", None], hasher=self.hasher)

    def test_iteration_is_fail_fast(self):
        """Changing the sequence during iteration raises RuntimeError"""
        seq = HashedSequence(["a", "b", "c"], hasher=self.hasher)
        with self.assertRaises(RuntimeError):
            for item in seq:
                if item == "a":
                    seq.append("d")

    def test_tree_uses_sequence_hasher(self):
        """A tree built from a sequence hashes with the sequence's hasher"""
        seq = HashedSequence(["a", "b", "c"], hasher=Hasher("sha256"))
        tree = MerkleTree(seq)
        self.assertEqual(tree.hasher.algorithm, "sha256")
        self.assertEqual(tree.width, 3)
        self.assertEqual(tree.root, MerkleTree(["a", "b", "c"], hasher=Hasher("sha256")).root)


if __name__ == "__main__":
    unittest.main(verbosity=2)
