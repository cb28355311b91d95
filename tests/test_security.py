"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import timedelta

import jwt

from app.core.config import Settings
from app.core.security import (
    BCRYPT_MAX_BYTES,
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)


class TestPasswordHasher(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = self.hasher.hash("123")
        self.assertNotEqual(hashed, "123")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(self.hasher.verify("123", hashed))
        self.assertFalse(self.hasher.verify("1234", hashed))

    def test_fresh_salt_per_hash(self) -> None:
        self.assertNotEqual(self.hasher.hash("same"), self.hasher.hash("same"))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(self.hasher.verify("123", "not-a-bcrypt-hash"))

    def test_long_password_is_truncated_consistently(self) -> None:
        long_pw = "x" * (BCRYPT_MAX_BYTES + 20)
        hashed = self.hasher.hash(long_pw)
        self.assertTrue(self.hasher.verify(long_pw, hashed))

    def test_rounds_from_settings(self) -> None:
        hasher = get_password_hasher(Settings(BCRYPT_ROUNDS=5))
        self.assertEqual(hasher.rounds, 5)


class TestTokenService(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService("secret", expire_minutes=5)

    def test_issue_and_verify_round_trip(self) -> None:
        token = self.tokens.issue({"id": 7, "email": "a@b.com"})
        payload = self.tokens.verify(token)
        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["email"], "a@b.com")
        self.assertEqual(payload["exp"] - payload["iat"], 5 * 60)

    def test_negative_delta_is_expired(self) -> None:
        token = self.tokens.issue({"id": 7}, expires_delta=timedelta(seconds=-10))
        with self.assertRaises(jwt.ExpiredSignatureError):
            self.tokens.verify(token)

    def test_wrong_secret_rejected(self) -> None:
        token = TokenService("other").issue({"id": 7})
        with self.assertRaises(jwt.InvalidSignatureError):
            self.tokens.verify(token)

    def test_token_without_exp_rejected(self) -> None:
        token = jwt.encode({"id": 7}, "secret", algorithm="HS256")
        with self.assertRaises(jwt.MissingRequiredClaimError):
            self.tokens.verify(token)

    def test_built_from_settings(self) -> None:
        service = get_token_service(Settings(JWT_EXPIRE_MINUTES=15, JWT_SECRET="s3cret"))
        self.assertEqual(service.expire_minutes, 15)
        self.assertEqual(service.verify(service.issue({"id": 1}))["id"], 1)


if __name__ == "__main__":
    unittest.main()
