"""Unit tests for app.core.config: settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


class TestSettingsValidation(unittest.TestCase):
    def test_accepts_postgres_and_sqlite_urls(self) -> None:
        self.assertEqual(
            Settings(DATABASE_URL=" postgresql://u:p@db:5432/users ").DATABASE_URL,
            "postgresql+psycopg2://u:p@db:5432/users",
        )
        self.assertEqual(Settings(DATABASE_URL="sqlite:///users.db").DATABASE_URL, "sqlite:///users.db")

    def test_default_url_uses_psycopg2_driver(self) -> None:
        self.assertTrue(Settings.model_fields["DATABASE_URL"].default.startswith("postgresql+psycopg2://"))

    def test_bare_postgres_urls_get_psycopg2_driver(self) -> None:
        for url in ("postgres://u:p@db/users", "postgres+psycopg2://u:p@db/users"):
            self.assertEqual(Settings(DATABASE_URL=url).DATABASE_URL, "postgresql+psycopg2://u:p@db/users")
        self.assertEqual(
            Settings(DATABASE_URL="postgresql+psycopg2://u:p@db/users").DATABASE_URL,
            "postgresql+psycopg2://u:p@db/users",
        )

    def test_rejects_other_database_urls(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@db/users")

    def test_rejects_blank_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ")

    def test_jwt_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=10081)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)
        self.assertEqual(Settings(BCRYPT_ROUNDS=16).BCRYPT_ROUNDS, 16)

    def test_log_level_normalised(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_api_prefix(self) -> None:
        self.assertEqual(Settings(API_V1_PREFIX="/api/v1/").API_V1_PREFIX, "/api/v1")
        self.assertEqual(Settings(API_V1_PREFIX="").API_V1_PREFIX, "")
        with self.assertRaises(ValidationError):
            Settings(API_V1_PREFIX="api")

    def test_cors_origins_split(self) -> None:
        settings = Settings(CORS_ORIGINS="https://a.example, ,https://b.example")
        self.assertEqual(settings.cors_origins, ["https://a.example", "https://b.example"])


if __name__ == "__main__":
    unittest.main()
