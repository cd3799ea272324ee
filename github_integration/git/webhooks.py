import asyncio
import hashlib
import hmac
import inspect
import json
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

logger = logging.getLogger("github_app.webhooks")

EventHandler = Callable[["WebhookEvent"], Union[None, Awaitable[None]]]
ErrorHandler = Callable[["WebhookHandlerError"], Union[None, Awaitable[None]]]


# ----------------- ERRORS -----------------
class WebhookError(Exception):
    pass


class WebhookSignatureError(WebhookError):
    pass


class WebhookPayloadError(WebhookError):
    pass


class WebhookHandlerError(WebhookError):
    """Ошибки обработчиков одной доставки, собранные вместе"""

    def __init__(self, event: "WebhookEvent", errors: List[BaseException]):
        self.event = event
        self.errors = errors
        super().__init__(
            f"{len(errors)} handler error(s) for event {event.name} (id={event.id})"
        )


# ----------------- EVENT -----------------
@dataclass
class WebhookEvent:
    id: str
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def action(self) -> Optional[str]:
        action = self.payload.get("action")
        return action if isinstance(action, str) else None


# ----------------- DISPATCHER -----------------
class Webhooks:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Webhook secret must not be empty")
        self._secret = secret.encode()
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._any_handlers: List[EventHandler] = []
        self._error_handlers: List[ErrorHandler] = []

    def sign(self, payload: bytes) -> str:
        mac = hmac.new(self._secret, msg=payload, digestmod=hashlib.sha256)
        return f"sha256={mac.hexdigest()}"

    def verify(self, payload: bytes, signature: Optional[str]) -> bool:
        """Проверка подписи GitHub webhook"""
        if not signature:
            return False
        # заголовок декодирован как latin-1, сравниваем байты
        return hmac.compare_digest(
            self.sign(payload).encode(),
            signature.encode("utf-8", "surrogateescape"),
        )

    def on(self, event_names: Union[str, List[str]], handler: Optional[EventHandler] = None):
        """
        Регистрирует обработчик для "push" или "star.created".
        Без handler работает как декоратор.
        """
        names = [event_names] if isinstance(event_names, str) else list(event_names)

        def register(fn: EventHandler) -> EventHandler:
            for name in names:
                self._handlers[name].append(fn)
            return fn

        if handler is None:
            return register
        return register(handler)

    def on_any(self, handler: EventHandler) -> EventHandler:
        self._any_handlers.append(handler)
        return handler

    def on_error(self, handler: ErrorHandler) -> ErrorHandler:
        self._error_handlers.append(handler)
        return handler

    def handlers_for(self, event: WebhookEvent) -> List[EventHandler]:
        handlers = list(self._handlers.get(event.name, []))
        if event.action:
            handlers.extend(self._handlers.get(f"{event.name}.{event.action}", []))
        handlers.extend(self._any_handlers)
        return handlers

    async def receive(self, event: WebhookEvent) -> None:
        handlers = self.handlers_for(event)
        logger.debug(
            "Dispatching event name=%s id=%s handlers=%s",
            event.name,
            event.id,
            len(handlers),
        )

        results = await asyncio.gather(
            *(_call(handler, event) for handler in handlers),
            return_exceptions=True,
        )
        for r in results:
            if isinstance(r, BaseException) and not isinstance(r, Exception):
                raise r
        errors = [r for r in results if isinstance(r, Exception)]
        if not errors:
            return

        error = WebhookHandlerError(event, errors)
        for error_handler in self._error_handlers:
            try:
                await _call(error_handler, error)
            except Exception:
                logger.exception("Webhook error hook failed name=%s", event.name)
        raise error

    async def verify_and_receive(
        self,
        id: str,
        name: str,
        payload: bytes,
        signature: Optional[str],
    ) -> None:
        if not self.verify(payload, signature):
            logger.warning("Invalid or missing signature name=%s id=%s", name, id)
            raise WebhookSignatureError("Invalid signature")

        try:
            data = json.loads(payload)
        except ValueError as e:
            raise WebhookPayloadError("Malformed payload") from e
        if not isinstance(data, dict):
            raise WebhookPayloadError("Payload must be a JSON object")

        await self.receive(WebhookEvent(id=id, name=name, payload=data))


async def _call(fn: Callable[[Any], Any], arg: Any) -> None:
    result = fn(arg)
    if inspect.isawaitable(result):
        await result
