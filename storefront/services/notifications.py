"""
Notification Service

Fire-and-forget delivery of shopper-facing error messages. The storefront
front end subscribes a handler (toast, snackbar, bot message); every message
is also logged. A failing handler never breaks the cart operation.
"""

from typing import Callable

from storefront.logging import get_logger

logger = get_logger(__name__)

NotificationHandler = Callable[[str], None]


class NotificationService:
    """Dispatches error-level messages to subscribed handlers."""

    def __init__(self, *handlers: NotificationHandler):
        self._handlers: list[NotificationHandler] = list(handlers)

    def subscribe(self, handler: NotificationHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: NotificationHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def error(self, message: str) -> None:
        """Emit an error notification to every handler."""
        logger.info(f"Notify: {message}")
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception:
                logger.exception("Notification handler failed")
