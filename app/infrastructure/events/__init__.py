"""Infrastructure event system - in-process change notification.

Usage:

    from infrastructure.events import EventEmitter

    on_change = EventEmitter("i18n.index.reloaded")
    unsubscribe = on_change.subscribe(lambda event: refresh())
    on_change.fire(locale_count=2)
    unsubscribe()
"""

from infrastructure.events.emitter import EventEmitter, EventHandler
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "EventEmitter",
    "EventHandler",
]
