"""Broadcast channel for change notifications.

An ``EventEmitter`` is owned by the component that produces the events (the
translation engine owns one for reloads). Any number of handlers may
subscribe; ``fire`` calls each of them synchronously. A handler that raises
is logged and skipped so the remaining handlers still run.
"""

from typing import Any, Callable, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


class EventEmitter:
    """Single event type, many subscribers.

    Attributes:
        event_type: Type stamped on every fired event.
    """

    def __init__(self, event_type: str):
        self.event_type = event_type
        self._handlers: List[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler.

        Args:
            handler: Callable receiving the fired Event.

        Returns:
            A callable that removes the handler again. Calling it twice is
            harmless.
        """
        self._handlers.append(handler)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_type=self.event_type,
            total_handlers=len(self._handlers),
        )

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def fire(self, **metadata: Any) -> List[Any]:
        """Dispatch an event to every subscribed handler.

        Args:
            **metadata: Optional diagnostics attached to the event.

        Returns:
            List of return values from the handlers that succeeded.
        """
        event = Event(event_type=self.event_type, metadata=metadata)
        results = []
        # Copy so handlers may unsubscribe while being notified
        handlers = list(self._handlers)

        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results

    @property
    def handler_count(self) -> int:
        """Number of currently subscribed handlers."""
        return len(self._handlers)

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()
