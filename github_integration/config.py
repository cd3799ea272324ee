import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def resolve_private_key(value: Optional[str]) -> Optional[str]:
    """
    GITHUB_PRIVATE_KEY может быть путем к PEM файлу или самим ключом.
    Формат ключа не проверяется, ошибки всплывут при подписи JWT.
    """
    if not value:
        return None

    if os.path.isfile(value):
        with open(value, "r", encoding="utf-8") as f:
            return f.read()

    return value


@dataclass(frozen=True)
class GitHubSettings:
    app_id: Optional[str] = None
    private_key: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    webhook_secret: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "GitHubSettings":
        return cls(
            app_id=environ.get("GITHUB_APP_ID") or None,
            private_key=resolve_private_key(environ.get("GITHUB_PRIVATE_KEY")),
            client_id=environ.get("GITHUB_CLIENT_ID") or None,
            client_secret=environ.get("GITHUB_CLIENT_SECRET") or None,
            redirect_uri=environ.get("GITHUB_REDIRECT_URI") or None,
            webhook_secret=environ.get("GITHUB_WEBHOOK_SECRET") or None,
        )

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, f.name) for f in fields(self))

    def missing(self) -> list[str]:
        return [f.name for f in fields(self) if not getattr(self, f.name)]
