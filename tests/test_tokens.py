"""Unit tests for accounts.core.tokens: issuance, verification, expiry boundary."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from accounts.core.errors import ConfigError
from accounts.core.tokens import (
    TokenExpired,
    TokenInvalid,
    TokenMalformed,
    TokenService,
)

SECRET = "unit-test-signing-secret-long-enough-for-hs256"


class TestTokenServiceConstruction(unittest.TestCase):
    """An unset signing secret is a configuration error, not a per-request one."""

    def test_empty_secret_raises_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            TokenService(secret="")

    def test_blank_secret_raises_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            TokenService(secret="   ")

    def test_default_lifetime_is_one_hour(self) -> None:
        self.assertEqual(TokenService(secret=SECRET).lifetime, timedelta(hours=1))


class TestIssueAndVerify(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(secret=SECRET)

    def test_claims_round_trip(self) -> None:
        token = self.tokens.issue("user-123", "ADMIN")
        claims = self.tokens.verify(token)
        self.assertEqual(claims.user_id, "user-123")
        self.assertEqual(claims.role, "ADMIN")
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=1))

    def test_accepted_at_59_minutes(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=59)
        token = self.tokens.issue("user-123", "USER", now=issued)
        self.assertEqual(self.tokens.verify(token).user_id, "user-123")

    def test_rejected_at_61_minutes(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=61)
        token = self.tokens.issue("user-123", "USER", now=issued)
        with self.assertRaises(TokenExpired):
            self.tokens.verify(token)

    def test_wrong_secret_is_invalid(self) -> None:
        token = TokenService(secret="some-other-signing-secret-of-similar-length").issue("user-123", "USER")
        with self.assertRaises(TokenInvalid):
            self.tokens.verify(token)

    def test_tampered_payload_is_invalid(self) -> None:
        header, _payload, signature = self.tokens.issue("user-123", "USER").split(".")
        forged_payload = jwt.encode(
            {"sub": "user-123", "role": "SUPERADMIN", "iat": 0, "exp": 9999999999},
            "attacker-chosen-signing-secret-0123456789",
            algorithm="HS256",
        ).split(".")[1]
        with self.assertRaises(TokenInvalid):
            self.tokens.verify(f"{header}.{forged_payload}.{signature}")

    def test_garbage_is_malformed(self) -> None:
        for garbage in ("not-a-token", "a.b.c", ""):
            with self.subTest(token=garbage):
                with self.assertRaises(TokenMalformed):
                    self.tokens.verify(garbage)

    def test_missing_role_claim_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "user-123", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenMalformed):
            self.tokens.verify(token)

    def test_missing_expiry_is_malformed(self) -> None:
        token = jwt.encode(
            {"sub": "user-123", "role": "USER", "iat": datetime.now(UTC)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenMalformed):
            self.tokens.verify(token)


if __name__ == "__main__":
    unittest.main()
