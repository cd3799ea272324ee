import logging
import time
from typing import Optional
from urllib.parse import urlencode

import jwt
import requests
from github import Github

from github_integration.git.webhooks import Webhooks

logger = logging.getLogger("github_app.client")

GITHUB_API_URL = "https://api.github.com"
GITHUB_OAUTH_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_OAUTH_TOKEN_URL = "https://github.com/login/oauth/access_token"


class GitHubOAuthError(Exception):
    pass


class GitHubApp:
    def __init__(
        self,
        app_id: str,
        private_key: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        webhook_secret: str,
    ):
        self.app_id = app_id
        self.private_key = private_key
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.webhooks = Webhooks(webhook_secret)
        logger.info("GitHubApp init app_id=%s", app_id)

    def get_jwt(self) -> str:
        logger.debug(
            "Generating JWT (app_id=%s)",
            self.app_id,
        )

        now = int(time.time())
        payload = {
            # запас на расхождение часов с GitHub
            "iat": now - 60,
            "exp": now + 600,
            "iss": self.app_id,
        }

        try:
            token = jwt.encode(payload, self.private_key, algorithm="RS256")
        except Exception:
            logger.exception("Failed to sign JWT app_id=%s", self.app_id)
            raise

        logger.debug("JWT generated successfully")
        return token

    def get_installation_token(self, installation_id: int) -> str:
        logger.info(
            "Requesting installation token installation_id=%s",
            installation_id,
        )

        jwt_token = self.get_jwt()
        url = f"{GITHUB_API_URL}/app/installations/{installation_id}/access_tokens"

        headers = {
            "Authorization": f"Bearer {jwt_token}",
            "Accept": "application/vnd.github+json",
        }

        try:
            resp = requests.post(url, headers=headers, timeout=10)
            logger.debug(
                "GitHub token response status=%s",
                resp.status_code,
            )
            resp.raise_for_status()
        except Exception:
            logger.exception("Failed to obtain installation token")
            raise

        token = resp.json()["token"]
        logger.info("Installation token obtained successfully")

        return token

    def get_installation_client(self, installation_id: int) -> Github:
        return Github(self.get_installation_token(installation_id))

    def get_oauth_authorize_url(self, state: Optional[str] = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
        }
        if state:
            params["state"] = state
        return f"{GITHUB_OAUTH_AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_oauth_code(self, code: str, state: Optional[str] = None) -> dict:
        """
        Обменивает OAuth code на user access token.
        GitHub отвечает 200 даже при ошибке, поэтому проверяем поле error.
        """
        logger.info("Exchanging OAuth code client_id=%s", self.client_id)

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }
        if state:
            data["state"] = state

        try:
            resp = requests.post(
                GITHUB_OAUTH_TOKEN_URL,
                data=data,
                headers={"Accept": "application/json"},
                timeout=10,
            )
            resp.raise_for_status()
        except Exception:
            logger.exception("Failed to exchange OAuth code")
            raise

        body = resp.json()
        if "error" in body:
            logger.warning(
                "OAuth code exchange rejected error=%s",
                body["error"],
            )
            raise GitHubOAuthError(body.get("error_description") or body["error"])

        logger.info("OAuth token obtained successfully")
        return body
