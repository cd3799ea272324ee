import logging

from github_integration.git.webhooks import WebhookEvent, WebhookHandlerError, Webhooks

logger = logging.getLogger("github-webhook")


async def on_push(event: WebhookEvent):
    payload = event.payload
    logger.info(
        "Push to %s by %s",
        payload["repository"]["full_name"],
        payload["pusher"]["name"],
        extra={"event": "push"},
    )


async def on_pull_request(event: WebhookEvent):
    payload = event.payload
    logger.info(
        "PR %s on %s: #%s - %s",
        payload["action"],
        payload["repository"]["full_name"],
        payload["pull_request"]["number"],
        payload["pull_request"]["title"],
        extra={"event": "pull_request"},
    )


async def on_issues(event: WebhookEvent):
    payload = event.payload
    logger.info(
        "Issue %s on %s: #%s - %s",
        payload["action"],
        payload["repository"]["full_name"],
        payload["issue"]["number"],
        payload["issue"]["title"],
        extra={"event": "issues"},
    )


async def on_star(event: WebhookEvent):
    payload = event.payload
    action = "starred" if payload["action"] == "created" else "unstarred"
    logger.info(
        "Repository %s: %s by %s",
        action,
        payload["repository"]["full_name"],
        payload["sender"]["login"],
        extra={"event": "star"},
    )


async def on_repository(event: WebhookEvent):
    payload = event.payload
    logger.info(
        "Repository %s: %s",
        payload["action"],
        payload["repository"]["full_name"],
        extra={"event": "repository"},
    )


async def on_any(event: WebhookEvent):
    logger.info(
        "Received webhook event: %s",
        event.name,
        extra={"event": event.name, "delivery_id": event.id},
    )


def on_error(error: WebhookHandlerError):
    logger.error(
        "Webhook handler error: %s",
        error.event.name,
        exc_info=error.errors[0] if len(error.errors) == 1 else error,
        extra={"event": error.event.name, "delivery_id": error.event.id},
    )


def register_webhook_handlers(webhooks: Webhooks) -> None:
    webhooks.on("push", on_push)
    webhooks.on("pull_request", on_pull_request)
    webhooks.on("issues", on_issues)
    webhooks.on(["star.created", "star.deleted"], on_star)
    webhooks.on("repository", on_repository)

    # catch-all, срабатывает и для событий выше
    webhooks.on_any(on_any)
    webhooks.on_error(on_error)
