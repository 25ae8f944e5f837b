"""
Digest Function Tests

Unit tests for the hashlib backed digest function used by the hash tree.
"""

import hashlib
import os
import sys
import unittest
from unittest import mock

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from hashtree import Hasher, InvalidInputError
from hashtree.config import get_settings


def md5_hex(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


class TestHasher(unittest.TestCase):
    """
    Tests for Hasher digests of items, raw bytes and digest pairs.
    """

    def setUp(self):
        self.hasher = Hasher("md5", "utf-8")

    def test_digest_of_text_item(self):
        """Text items are hashed through their encoded bytes"""
        self.assertEqual(self.hasher.digest_data("hello"), "5d41402abc4b2a76b9719d911017c592")

    def test_digest_of_bytes_item(self):
        """Bytes items are hashed as-is"""
        self.assertEqual(self.hasher.digest_data(b"hello"), md5_hex(b"hello"))
        self.assertEqual(self.hasher.digest_data(bytearray(b"hello")), md5_hex(b"hello"))

    def test_digest_of_other_items_uses_str(self):
        """Non-text items are hashed through str(item)"""
        self.assertEqual(self.hasher.digest_data(42), md5_hex(b"42"))
        self.assertEqual(self.hasher.digest_data(42), self.hasher.digest_data("42"))

    def test_digest_of_none_raises(self):
        """None has no digest"""
        with self.assertRaises(InvalidInputError):
            self.hasher.digest_data(None)

    def test_combine_concatenates_hex_digests(self):
        """Pairs hash the ASCII bytes of both hex digests"""
        left = self.hasher.digest_data("A")
        right = self.hasher.digest_data("B")
        self.assertEqual(
            self.hasher.combine(left, right),
            md5_hex((left + right).encode("ascii")),
        )

    def test_combine_single_digest_rehashes(self):
        """A lone digest is re-hashed rather than copied"""
        digest = self.hasher.digest_data("C")
        promoted = self.hasher.combine(digest)
        self.assertEqual(promoted, md5_hex(digest.encode("ascii")))
        self.assertNotEqual(promoted, digest)

    def test_combine_is_order_sensitive(self):
        left = self.hasher.digest_data("A")
        right = self.hasher.digest_data("B")
        self.assertNotEqual(self.hasher.combine(left, right), self.hasher.combine(right, left))

    def test_alternative_algorithm(self):
        """Any fixed-size hashlib algorithm is accepted"""
        hasher = Hasher("sha256")
        self.assertEqual(hasher.digest_data("hello"), hashlib.sha256(b"hello").hexdigest())
        self.assertEqual(hasher.digest_size, 32)
        self.assertEqual(self.hasher.digest_size, 16)

    def test_algorithm_name_is_normalized(self):
        self.assertEqual(Hasher(" SHA256 ").algorithm, "sha256")

    def test_unknown_algorithm_raises(self):
        with self.assertRaises(InvalidInputError):
            Hasher("not-a-real-hash")

    def test_variable_length_algorithm_raises(self):
        with self.assertRaises(InvalidInputError):
            Hasher("shake_128")

    def test_unknown_encoding_raises(self):
        """Encodings are checked when the hasher is created"""
        with self.assertRaises(InvalidInputError):
            Hasher("md5", "not-a-codec")
        with mock.patch.dict(os.environ, {"HASHTREE_ENCODING": "not-a-codec"}, clear=True):
            with self.assertRaises(InvalidInputError):
                Hasher("md5")

    def test_equality(self):
        self.assertEqual(Hasher("md5", "utf-8"), self.hasher)
        self.assertNotEqual(Hasher("sha1", "utf-8"), self.hasher)
        self.assertEqual(len({Hasher("md5", "utf-8"), self.hasher}), 1)


class TestSettings(unittest.TestCase):
    """
    Tests for environment driven configuration.
    """

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        self.assertEqual(settings.algorithm, "md5")
        self.assertEqual(settings.encoding, "utf-8")
        self.assertEqual(settings.log_level, "INFO")

    def test_environment_overrides(self):
        env = {
            "HASHTREE_ALGORITHM": "SHA1",
            "HASHTREE_ENCODING": "latin-1",
            "HASHTREE_LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_settings()
            hasher = Hasher()
        self.assertEqual(settings.algorithm, "sha1")
        self.assertEqual(settings.encoding, "latin-1")
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(hasher.algorithm, "sha1")
        self.assertEqual(hasher.encoding, "latin-1")

    def test_explicit_arguments_win_over_environment(self):
        with mock.patch.dict(os.environ, {"HASHTREE_ALGORITHM": "sha1"}, clear=True):
            hasher = Hasher("sha256")
        self.assertEqual(hasher.algorithm, "sha256")


if __name__ == "__main__":
    unittest.main(verbosity=2)
