"""Pytest configuration for GitHub integration tests."""

import pytest

from github_integration.config import GitHubSettings

GITHUB_ENV = {
    "GITHUB_APP_ID": "12345",
    "GITHUB_PRIVATE_KEY": "INLINEKEY",
    "GITHUB_CLIENT_ID": "Iv1.client",
    "GITHUB_CLIENT_SECRET": "client-secret",
    "GITHUB_REDIRECT_URI": "https://example.com/github/callback",
    "GITHUB_WEBHOOK_SECRET": "test-webhook-secret",
}


@pytest.fixture
def github_env(monkeypatch):
    """Set all GitHub App environment variables."""
    for name, value in GITHUB_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(GITHUB_ENV)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all GitHub App environment variables."""
    for name in GITHUB_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Complete settings with an inline key."""
    return GitHubSettings(
        app_id=GITHUB_ENV["GITHUB_APP_ID"],
        private_key=GITHUB_ENV["GITHUB_PRIVATE_KEY"],
        client_id=GITHUB_ENV["GITHUB_CLIENT_ID"],
        client_secret=GITHUB_ENV["GITHUB_CLIENT_SECRET"],
        redirect_uri=GITHUB_ENV["GITHUB_REDIRECT_URI"],
        webhook_secret=GITHUB_ENV["GITHUB_WEBHOOK_SECRET"],
    )


@pytest.fixture
def push_payload():
    return {
        "ref": "refs/heads/main",
        "repository": {"full_name": "org/repo"},
        "pusher": {"name": "alice"},
        "sender": {"login": "alice"},
    }


@pytest.fixture
def star_payload():
    def build(action):
        return {
            "action": action,
            "repository": {"full_name": "org/repo"},
            "sender": {"login": "bob"},
        }

    return build
