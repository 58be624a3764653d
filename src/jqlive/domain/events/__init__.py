"""Event system for decoupled component communication.

The query pipeline publishes events, and the TUI subscribes to them.

Example:
    ```python
    from jqlive.domain.events import EventBus, QueryFailed

    event_bus = EventBus()

    def handle_failure(event: QueryFailed):
        print(f"{event.query}: {event.diagnostic}")

    event_bus.subscribe(QueryFailed, handle_failure)
    ```
"""

from .bus import EventBus
from .types import Event, QueryDiscarded, QueryFailed, QueryResultPublished

__all__ = [
    "EventBus",
    "Event",
    "QueryDiscarded",
    "QueryFailed",
    "QueryResultPublished",
]
