"""Wiring tests: health, access log, configuration loading."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from accounts.core.config import Settings, load_settings
from accounts.core.errors import ConfigError
from accounts.core.log_config import ACCESS_LOGGER_NAME
from tests.support import ApiTestCase


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"status": "ok", "environment": "dev", "database": "connected"},
        )

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Accounts API"})


class TestAccessLog(ApiTestCase):
    def test_one_line_per_request(self) -> None:
        with self.assertLogs(ACCESS_LOGGER_NAME, level="INFO") as captured:
            self.client.post("/api/login", json={})
        self.assertEqual(len(captured.records), 1)
        line = captured.records[0].getMessage()
        self.assertTrue(line.startswith("POST /api/login 400 "))
        self.assertIn(" ms ", line)
        self.assertTrue(line.endswith("GMT"))


class TestConfiguration(unittest.TestCase):
    def test_missing_secret_is_fatal(self) -> None:
        env = {k: v for k, v in os.environ.items() if k != "JWT_SECRET"}
        with patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ConfigError):
                load_settings_without_env_file()

    def test_blank_secret_is_fatal(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "   "}):
            with self.assertRaises(ConfigError):
                load_settings_without_env_file()

    def test_non_sql_database_url_is_fatal(self) -> None:
        with patch.dict(os.environ, {"DATABASE_URL": "mongodb://localhost:27017/accounts"}):
            with self.assertRaises(ConfigError):
                load_settings_without_env_file()

    def test_settings_are_frozen(self) -> None:
        settings = load_settings_without_env_file()
        with self.assertRaises(ValidationError):
            settings.JWT_EXPIRE_MINUTES = 5

    def test_defaults(self) -> None:
        settings = load_settings_without_env_file()
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.MAX_UPLOAD_BYTES, 1_000_000)
        self.assertEqual(settings.LOGIN_RATE_LIMIT, "5/minute")
        self.assertEqual(settings.API_PREFIX, "/api")


def load_settings_without_env_file() -> Settings:
    """load_settings, ignoring any .env file in the working directory."""
    with patch.dict(Settings.model_config, {"env_file": None}):
        return load_settings()


if __name__ == "__main__":
    unittest.main()
