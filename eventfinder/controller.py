"""
Presentation controller.

Owns the visible UI state and is the single place where failures are turned
into user-facing messages. Views subscribe through ``on_change`` and render
from the UIState snapshot; nothing here touches module-level state.

Everything runs on one thread. Overlapping searches (a submit issued while
another is still waiting on the client) resolve last-submitted-wins: each
submit takes a token and a response carrying a stale token is dropped.
"""

import enum
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from eventfinder.api import TicketmasterClient
from eventfinder.errors import EmptyResult, HttpError, NotFound, RequestTimeout
from eventfinder.models import EventRecord, SearchResult

log = logging.getLogger(__name__)

MSG_EMPTY_CITY = "Please enter a city name"
MSG_NO_EVENTS = "No events found in {city}. Try another city or category."
MSG_TIMEOUT = "Request timed out. Please check your connection and try again."
MSG_SERVER = "Server error. Please try again later."
MSG_GENERIC = "Unable to load events. "
MSG_DETAIL = "Unable to load event details"


class Status(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    RESULTS = "results"


@dataclass
class UIState:
    status: Status = Status.IDLE
    message: Optional[str] = None
    result: Optional[SearchResult] = None
    # Overlay, independent of status
    modal: Optional[EventRecord] = None
    detail_error: Optional[str] = None

    @property
    def modal_open(self) -> bool:
        return self.modal is not None


def error_message(exc: Exception, city: str) -> str:
    if isinstance(exc, EmptyResult):
        return MSG_NO_EVENTS.format(city=city)
    if isinstance(exc, RequestTimeout):
        return MSG_TIMEOUT
    if isinstance(exc, HttpError):
        return MSG_SERVER
    return MSG_GENERIC + (str(exc) or "Please try again.")


class EventFinderController:
    def __init__(
        self,
        client: TicketmasterClient,
        on_change: Optional[Callable[[UIState], None]] = None,
    ):
        self.client = client
        self.state = UIState()
        self._listeners: list[Callable[[UIState], None]] = []
        if on_change:
            self._listeners.append(on_change)
        self._tokens = itertools.count(1)
        self._current_token = 0

    def subscribe(self, listener: Callable[[UIState], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.state)

    # --- Search ---

    def submit(self, city: str, category: str = "") -> UIState:
        city = (city or "").strip()
        category = category or ""

        if not city:
            # Invalidate any search still in flight
            self._current_token = next(self._tokens)
            self._set_error(MSG_EMPTY_CITY)
            self._notify()
            return self.state

        token = self._current_token = next(self._tokens)
        self.state.status = Status.LOADING
        self.state.message = None
        self.state.detail_error = None
        self._notify()

        try:
            result = self.client.search_events(city, category)
        except Exception as exc:
            log.warning("Search error for %r: %s", city, exc)
            if token != self._current_token:
                log.debug("Dropping stale search failure (token %d)", token)
                return self.state
            self._set_error(error_message(exc, city))
        else:
            if token != self._current_token:
                log.debug("Dropping stale search result for %r (token %d)", city, token)
                return self.state
            self.state.status = Status.RESULTS
            self.state.message = None
            self.state.result = result
            log.info("Successfully loaded %d events", len(result.events))

        self._notify()
        return self.state

    def _set_error(self, message: str) -> None:
        # Previous results stay available for card lookups until a search replaces them
        self.state.status = Status.ERROR
        self.state.message = message

    # --- Detail modal ---

    def select_card(self, event_id: str) -> Optional[EventRecord]:
        """Open the modal for a card, fetching the event only if it is not in the current results."""
        self.state.detail_error = None
        try:
            event = self._lookup(event_id)
        except NotFound as exc:
            log.warning("Error loading event details: %s", exc.__cause__ or exc)
            self.state.detail_error = MSG_DETAIL
            self._notify()
            return None

        self.state.modal = event
        self._notify()
        return event

    def _lookup(self, event_id: str) -> EventRecord:
        result = self.state.result
        if result is not None:
            event = result.find(event_id)
            if event is not None:
                return event
        try:
            return self.client.get_event_by_id(event_id)
        except Exception as exc:
            raise NotFound(event_id) from exc

    def close_modal(self) -> None:
        if self.state.modal is None:
            return
        self.state.modal = None
        self._notify()

    def on_keydown(self, key: str) -> None:
        if key == "Escape" and self.state.modal_open:
            self.close_modal()

    def on_backdrop_click(self, target_is_backdrop: bool) -> None:
        # Clicks inside the modal content bubble up with target_is_backdrop=False
        if target_is_backdrop:
            self.close_modal()
