"""Test environment: set before any accounts module reads settings."""

import os
import tempfile

os.environ["APP_ENV"] = "dev"
os.environ["JWT_SECRET"] = "test-signing-secret-not-for-production"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ACCESS_LOG_PATH"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="accounts-uploads-")
os.environ["RATE_LIMIT_ENABLED"] = "true"
