"""
Failure kinds raised by the transport adapter and the controller.

The controller is the only place that turns these into user-facing text.
"""


class EventFinderError(Exception):
    """Base class for every eventfinder failure."""


class ConfigError(EventFinderError):
    pass


class ValidationError(EventFinderError):
    pass


class RequestTimeout(EventFinderError):
    def __init__(self, timeout: float):
        super().__init__(f"Request timeout after {timeout}s")
        self.timeout = timeout


class HttpError(EventFinderError):
    def __init__(self, status: int, reason: str = ""):
        super().__init__(f"HTTP Error: {status} - {reason}".rstrip(" -"))
        self.status = status
        self.reason = reason


class EmptyResult(EventFinderError):
    def __init__(self, city: str):
        super().__init__(f"No events found for {city!r}")
        self.city = city


class InvalidResponse(EventFinderError):
    pass


class TransportError(EventFinderError):
    pass


class NotFound(EventFinderError):
    """A card id was neither in the current results nor retrievable upstream."""

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id!r} not found")
        self.event_id = event_id
