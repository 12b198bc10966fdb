"""Unit tests for app.core.config validators and TokenConfig construction."""

import unittest
from datetime import timedelta

from pydantic import ValidationError

from app.core.config import Settings, get_token_config


class TestSettingsValidation(unittest.TestCase):
    def test_rejects_non_sql_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://localhost/db")

    def test_default_database_url_names_psycopg2_driver(self) -> None:
        self.assertTrue(
            Settings.model_fields["DATABASE_URL"].default.startswith("postgresql+psycopg2://")
        )

    def test_accepts_sqlite_url(self) -> None:
        self.assertEqual(Settings(DATABASE_URL=" sqlite:///./auth.db ").DATABASE_URL, "sqlite:///./auth.db")

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ")

    def test_rejects_blank_audience(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_AUDIENCE="")

    def test_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=525601)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)

    def test_api_prefix_normalised(self) -> None:
        self.assertEqual(Settings(API_PREFIX="/api/v1/").API_PREFIX, "/api/v1")
        with self.assertRaises(ValidationError):
            Settings(API_PREFIX="api")


class TestTokenConfig(unittest.TestCase):
    def test_built_from_settings_once(self) -> None:
        config = get_token_config()
        self.assertIs(config, get_token_config())
        self.assertIsInstance(config.expires_in, timedelta)
        self.assertTrue(config.secret.get_secret_value())

    def test_is_immutable(self) -> None:
        with self.assertRaises(ValidationError):
            get_token_config().issuer = "http://other"
