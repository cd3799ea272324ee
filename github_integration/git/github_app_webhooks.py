import logging

from fastapi import APIRouter, Request, Header, HTTPException

from github_integration.git.integration import GitHubIntegration
from github_integration.git.webhooks import (
    WebhookHandlerError,
    WebhookPayloadError,
    WebhookSignatureError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_integration(request: Request) -> GitHubIntegration:
    return request.app.state.github


# ----------------- WEBHOOK -----------------
@router.post("/webhook")
async def github_webhook(
    request: Request,
    x_hub_signature_256: str | None = Header(None),
    x_github_event: str | None = Header(None),
    x_github_delivery: str | None = Header(None),
):
    webhooks = get_integration(request).get_webhooks()
    if webhooks is None:
        logger.warning("Webhook received but GitHub integration is not initialized")
        raise HTTPException(status_code=503, detail="GitHub integration disabled")

    if not x_github_event or not x_github_delivery or not x_hub_signature_256:
        logger.warning("Missing GitHub webhook headers")
        raise HTTPException(status_code=400, detail="Missing GitHub webhook headers")

    body = await request.body()

    try:
        await webhooks.verify_and_receive(
            id=x_github_delivery,
            name=x_github_event,
            payload=body,
            signature=x_hub_signature_256,
        )
    except WebhookSignatureError:
        raise HTTPException(status_code=401, detail="Invalid signature")
    except WebhookPayloadError:
        logger.exception("Malformed payload")
        raise HTTPException(status_code=400, detail="Malformed payload")
    except WebhookHandlerError:
        # уже залогировано через on_error
        raise HTTPException(status_code=500, detail="Webhook handler error")

    return {"status": "ok"}


@router.get("/health")
async def health(request: Request):
    integration = get_integration(request)
    return {
        "status": "ok",
        "github": integration.get_app() is not None,
    }
