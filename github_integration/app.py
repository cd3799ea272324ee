from contextlib import asynccontextmanager

from fastapi import FastAPI
from github_integration.config import LOG_LEVEL
from github_integration.git.github_app_webhooks import router as github_webhooks_router
from github_integration.git.integration import GitHubIntegration
from github_integration.logging import setup_logging


def create_app(integration: GitHubIntegration | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app.state.github.init()
        yield

    app = FastAPI(title="GitHub App Integration", lifespan=lifespan)
    app.state.github = integration or GitHubIntegration()
    app.include_router(github_webhooks_router)
    return app


setup_logging(LOG_LEVEL)
app = create_app()
