"""Unit tests for accounts.core.security: bcrypt hashing and verification."""

import unittest

from accounts.core.security import hash_password, verify_password


class TestHashPassword(unittest.TestCase):
    """hash_password returns a salted bcrypt hash, never the plaintext."""

    def test_hash_is_not_plaintext(self) -> None:
        hashed = hash_password("s3cret-pass")
        self.assertNotEqual(hashed, "s3cret-pass")
        self.assertTrue(hashed.startswith("$2b$"))

    def test_same_password_gives_different_hashes(self) -> None:
        first = hash_password("s3cret-pass")
        second = hash_password("s3cret-pass")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("s3cret-pass", first))
        self.assertTrue(verify_password("s3cret-pass", second))

    def test_explicit_rounds_are_encoded_in_hash(self) -> None:
        hashed = hash_password("s3cret-pass", rounds=5)
        self.assertTrue(hashed.startswith("$2b$05$"))


class TestVerifyPassword(unittest.TestCase):
    """verify_password matches only the original plaintext and never raises."""

    def test_round_trip(self) -> None:
        for plaintext in ("secret", "pässwörd-ünïcode", "x" * 72):
            with self.subTest(plaintext=plaintext):
                self.assertTrue(verify_password(plaintext, hash_password(plaintext)))

    def test_different_plaintext_fails(self) -> None:
        hashed = hash_password("correct-horse")
        self.assertFalse(verify_password("correct-horsf", hashed))
        self.assertFalse(verify_password("", hashed))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("anything", ""))


if __name__ == "__main__":
    unittest.main()
