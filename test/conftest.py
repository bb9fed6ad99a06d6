import os
import logging

# Must be set before the app module is imported: the limiter reads them at import time
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SESSION_TOKEN_WAIT_SECONDS", "0.05")
os.environ.setdefault("SENDGRID_API_KEY", "")
os.environ.setdefault("SECURE_COOKIES", "false")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager


class RecordingSender:
    """Email sender that keeps every code instead of sending it."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send_verification_code(self, recipient: str, code: str) -> None:
        self.sent.append((recipient, code))

    def last_code_for(self, email: str) -> str:
        for recipient, code in reversed(self.sent):
            if recipient == email:
                return code
        raise AssertionError(f"No code was sent to {email}")


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.INFO)


@pytest.fixture
def outbox() -> RecordingSender:
    return RecordingSender()


@pytest_asyncio.fixture
async def app(tmp_path, monkeypatch, outbox):
    """The application with a fresh SQLite database and a recording email sender."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    from service.service import app as menu_app

    async with LifespanManager(menu_app):
        menu_app.state.email_sender = outbox
        yield menu_app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def login(outbox):
    """Run the full email-code login on a client; returns the user id. The client keeps the cookie."""

    async def _login(client: AsyncClient, email: str) -> str:
        response = await client.post("/api/auth/request-verification-code", json={"email": email})
        assert response.status_code == 200, response.text

        response = await client.post(
            "/api/auth/verify-code",
            json={"email": email, "code": outbox.last_code_for(email)},
        )
        assert response.status_code == 200, response.text
        return response.json()["user_id"]

    return _login


@pytest_asyncio.fixture
async def owner_client(client, login):
    await login(client, "owner@example.com")
    return client


@pytest_asyncio.fixture
async def other_client(app, login):
    """A second browser logged in as a different owner"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        await login(client, "someone-else@example.com")
        yield client
