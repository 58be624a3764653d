"""Event types for the jqlive event system."""

import time
from dataclasses import dataclass, field

from jqlive.domain.types.results import Diagnostic, ResultType


@dataclass
class Event:
    """Base class for all events.

    All events in the system should inherit from this base class.
    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class QueryResultPublished(Event):
    """A query result was published to the document cache.

    Subscribers read the published snapshot from the cache itself so that the
    value, the rendered text and the metrics always come from the same result.
    """

    request_id: int
    query: str
    result_type: ResultType


@dataclass
class QueryFailed(Event):
    """jq rejected the latest query. The previous result stays published."""

    request_id: int
    query: str
    diagnostic: Diagnostic


@dataclass
class QueryDiscarded(Event):
    """A finished evaluation was dropped because a newer request exists."""

    request_id: int
    query: str
    latest_request_id: int
