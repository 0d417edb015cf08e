# ABOUTME: Pytest fixtures and configuration for newsletter-desk tests.
# ABOUTME: Provides test settings, store and email doubles, and a wired TestClient.

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from newsletter_desk.config import Settings
from tests.fakes import InMemorySubscriberStore, RecordingEmailClient

TEMPLATES_DIR = Path(__file__).parent.parent / "src" / "newsletter_desk" / "email" / "templates"


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        _env_file=None,
        db_host="localhost",
        db_user="newsletter",
        db_name="newsletter_test",
        db_password=SecretStr("test-db-password"),
        app_base_url="http://127.0.0.1:8000",
        email_backend="smtp",
        sender_email="sender@example.com",
        sender_name="Test Sender",
        smtp_host="localhost",
        smtp_port=1025,
        smtp_user=SecretStr("test-user"),
        smtp_password=SecretStr("test-password"),
        email_api_base_url="https://email.example.com",
        email_api_token=SecretStr("test-api-token"),
        email_timeout=5.0,
        templates_dir=TEMPLATES_DIR,
        log_level="DEBUG",
    )


@pytest.fixture
def store() -> InMemorySubscriberStore:
    return InMemorySubscriberStore()


@pytest.fixture
def email_client() -> RecordingEmailClient:
    return RecordingEmailClient()


@pytest.fixture
def client(
    mock_settings: Settings, store: InMemorySubscriberStore, email_client: RecordingEmailClient
) -> TestClient:
    """Create a test client wired to the in-memory store and recording email client."""
    from newsletter_desk.config import get_settings
    from newsletter_desk.web.app import create_app
    from newsletter_desk.web.dependencies import get_email_client, get_subscriber_repository

    with (
        patch("newsletter_desk.web.app.init_db", new_callable=AsyncMock),
        patch("newsletter_desk.web.app.close_db", new_callable=AsyncMock),
    ):
        app = create_app()

    app.dependency_overrides[get_settings] = lambda: mock_settings
    app.dependency_overrides[get_subscriber_repository] = lambda: store
    app.dependency_overrides[get_email_client] = lambda: email_client

    return TestClient(app, raise_server_exceptions=False)
