import logging
from typing import Optional

from github_integration.config import GitHubSettings
from github_integration.git.github_app import GitHubApp
from github_integration.git.handlers import register_webhook_handlers
from github_integration.git.webhooks import Webhooks

logger = logging.getLogger("github_app.integration")


class GitHubIntegration:
    """
    Контекст интеграции: App и отдельный webhooks dispatcher.
    Создается при старте и передается тем, кому нужен доступ к GitHub.
    """

    def __init__(self, settings: Optional[GitHubSettings] = None):
        self._settings = settings
        self._app: Optional[GitHubApp] = None
        self._webhooks: Optional[Webhooks] = None

    async def init(self) -> None:
        settings = self._settings or GitHubSettings.from_env()

        if not settings.is_complete:
            logger.debug(
                "GitHub integration disabled, missing=%s",
                ",".join(settings.missing()),
            )
            return

        self._app = GitHubApp(
            app_id=settings.app_id,
            private_key=settings.private_key,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            redirect_uri=settings.redirect_uri,
            webhook_secret=settings.webhook_secret,
        )

        self._webhooks = Webhooks(settings.webhook_secret)
        register_webhook_handlers(self._webhooks)

        logger.info("GitHub integration initialized app_id=%s", settings.app_id)

    def get_app(self) -> Optional[GitHubApp]:
        return self._app

    def get_webhooks(self) -> Optional[Webhooks]:
        return self._webhooks
