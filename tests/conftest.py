"""
Pytest configuration and fixtures for the Motri API tests.
"""
from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from motri.core.config import Settings
from motri.core.security import PasswordHasher
from motri.db.database import Database
from motri.main import create_app
from motri.models.director import Director
from motri.repositories.director_repo import create_director

DIRECTOR_PASSWORD = "secret123"

VALID_REPORT = {
    "name": "Jane Doe",
    "email": "jane@example.org",
    "phone": "+251911000000",
    "abuseType": "Emotional",
    "description": "Repeated verbal abuse by a supervisor",
    "sex": "Female",
    "workPosition": "Low",
    "educationLevel": "Diploma",
    "jobType": "Government",
    "incidentTime": "14:30",
    "incidentPlace": "Head office",
    "incidentDay": "2026-10-01",
}


class RecordingMailSender:
    """Captures outgoing mail instead of talking to SMTP."""

    def __init__(self) -> None:
        self.sent: List[dict] = []
        self.fail = False

    def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> bool:
        if self.fail:
            return False
        self.sent.append({"to": to_email, "subject": subject, "text": text_body, "html": html_body})
        return True


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key-for-unit-tests-only",
        DB_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        FRONTEND_BASE_URL="http://frontend.test",
        # billige Hash-Parameter fuer schnelle Tests
        ARGON2_TIME_COST=1,
        ARGON2_MEMORY_COST=1024,
        ARGON2_PARALLELISM=1,
        BCRYPT_ROUNDS=4,
        MAIL_BACKEND="console",
    )


@pytest.fixture
def database(settings) -> Generator[Database, None, None]:
    db = Database(settings.DB_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database) -> Generator[Session, None, None]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher(settings) -> PasswordHasher:
    return PasswordHasher.from_settings(settings)


@pytest.fixture
def mailer() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def app(settings, database, mailer):
    return create_app(settings, database=database, mail_sender=mailer)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def director(db_session, hasher) -> Director:
    return create_director(
        db_session,
        username="alice",
        email="Alice@Example.org",
        password=DIRECTOR_PASSWORD,
        hasher=hasher,
    )


@pytest.fixture
def token(client, director) -> str:
    resp = client.post("/api/auth/login", json={"identifier": "alice", "password": DIRECTOR_PASSWORD})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}
