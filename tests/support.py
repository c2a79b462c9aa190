"""Shared base class for API tests: in-memory SQLite store and a TestClient."""

import tempfile
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from accounts.core.database import get_db
from accounts.core.rate_limit import limiter
from accounts.core.storage import LocalStorage, get_storage
from accounts.core.tokens import get_token_service
from accounts.main import app
from accounts.models import Base, User
from accounts.services import user_store

DEFAULT_PASSWORD = "secret123"


class ApiTestCase(unittest.TestCase):
    """Fresh database, upload dir and rate-limit counters for every test."""

    raise_server_exceptions = True

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.upload_dir = tempfile.TemporaryDirectory()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_storage] = lambda: LocalStorage(self.upload_dir.name)
        limiter.reset()
        self.tokens = get_token_service()
        self.client = TestClient(app, raise_server_exceptions=self.raise_server_exceptions)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()
        self.upload_dir.cleanup()

    def create_user(
        self,
        email: str = "user@example.com",
        password: str = DEFAULT_PASSWORD,
        name: str = "Test User",
        role: str = "USER",
    ) -> tuple[User, str]:
        """Insert a user directly through the store; returns (user, access token)."""
        with self.SessionLocal() as db:
            user = user_store.create_user(
                db, {"email": email, "password": password, "name": name, "role": role}
            )
        return user, self.tokens.issue(user.id, user.role)

    def get_user(self, user_id: str) -> User | None:
        with self.SessionLocal() as db:
            return user_store.find_by_id(db, user_id)

    def set_role(self, user_id: str, role: str) -> None:
        with self.SessionLocal() as db:
            user = db.get(User, user_id)
            user.role = role
            db.commit()

    def count_users(self) -> int:
        with self.SessionLocal() as db:
            return db.scalar(select(func.count()).select_from(User))

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
