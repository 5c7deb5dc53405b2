"""
Ticketmaster Discovery API transport.

Search:  GET {base_url}/events.json?apikey=...&city=...&size=20[&classificationName=...]
Detail:  GET {base_url}/events/<id>.json?apikey=...

Each operation issues exactly one request: no retries, no caching. The search
call is bounded by a fixed timeout; the detail lookup is unbounded unless a
detail_timeout is configured.
"""

import logging
import re
from typing import Any, Optional
from urllib.parse import quote

import requests

from eventfinder import __version__
from eventfinder.errors import (
    EmptyResult,
    HttpError,
    InvalidResponse,
    RequestTimeout,
    TransportError,
    ValidationError,
)
from eventfinder.models import EventRecord, SearchResult

log = logging.getLogger(__name__)

BASE_URL = "https://app.ticketmaster.com/discovery/v2"
DEFAULT_TIMEOUT = 10
DEFAULT_SIZE = 20

_HEADERS = {"User-Agent": f"eventfinder/{__version__}", "Accept": "application/json"}
_APIKEY_RE = re.compile(r"""(apikey=)[^&\s'")]+""")


def redact(url: str) -> str:
    return _APIKEY_RE.sub(r"\1***", url)


class TicketmasterClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        size: int = DEFAULT_SIZE,
        country_code: Optional[str] = None,
        detail_timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.size = size
        self.country_code = country_code
        self.detail_timeout = detail_timeout
        self.session = session or requests.Session()
        self.session.headers.update(_HEADERS)

    @classmethod
    def from_config(cls, api_cfg: dict, api_key: str) -> "TicketmasterClient":
        return cls(
            api_key,
            base_url=api_cfg.get("base_url", BASE_URL),
            timeout=api_cfg.get("timeout", DEFAULT_TIMEOUT),
            size=api_cfg.get("size", DEFAULT_SIZE),
            country_code=api_cfg.get("country_code"),
            detail_timeout=api_cfg.get("detail_timeout"),
        )

    # --- URLs ---

    def build_search_url(self, city: str, category: str = "") -> str:
        params: dict[str, Any] = {
            "apikey": self.api_key,
            "city": city,
            "size": self.size,
        }
        if category:
            params["classificationName"] = category
        if self.country_code:
            params["countryCode"] = self.country_code
        return _prepare(f"{self.base_url}/events.json", params)

    def build_detail_url(self, event_id: str) -> str:
        path = quote(event_id, safe="")
        return _prepare(f"{self.base_url}/events/{path}.json", {"apikey": self.api_key})

    # --- Operations ---

    def search_events(self, city: str, category: str = "") -> SearchResult:
        """Search events in a city, optionally filtered by classification name.

        Raises:
            ValidationError: city is blank; no request is made.
            RequestTimeout: connecting, or any single wait for response bytes,
                took longer than self.timeout seconds. The bound is per wait,
                not a deadline on the whole exchange.
            HttpError: non-2xx response status.
            EmptyResult: well-formed response without any events.
            InvalidResponse: body is not a JSON object.
            TransportError: any other network failure.
        """
        city = (city or "").strip()
        if not city:
            raise ValidationError("Please enter a city name")

        url = self.build_search_url(city, category or "")
        log.debug("Fetching events from: %s", redact(url))
        data = self._get_json(url, self.timeout)

        events = (data.get("_embedded") or {}).get("events")
        if not events:
            log.warning("No events found for city=%r category=%r", city, category)
            raise EmptyResult(city)

        page = data.get("page") or {}
        return SearchResult(
            events=[EventRecord.from_api(e) for e in events],
            total=page.get("totalElements", len(events)),
            city=city,
            page=page,
        )

    def get_event_by_id(self, event_id: str) -> EventRecord:
        event_id = (event_id or "").strip()
        if not event_id:
            raise ValidationError("Event id must not be empty")

        url = self.build_detail_url(event_id)
        log.debug("Fetching event details from: %s", redact(url))
        return EventRecord.from_api(self._get_json(url, self.detail_timeout))

    def _get_json(self, url: str, timeout: Optional[float]) -> dict:
        try:
            # The context manager releases the connection on every exit path
            with self.session.get(url, timeout=timeout) as response:
                if not response.ok:
                    raise HttpError(response.status_code, response.reason or "")
                try:
                    data = response.json()
                except ValueError as exc:
                    raise InvalidResponse(f"Response from {redact(url)} is not JSON") from exc
        except requests.Timeout as exc:
            log.warning("Request timed out after %ss: %s", timeout, redact(url))
            raise RequestTimeout(timeout) from exc
        except requests.RequestException as exc:
            message = redact(str(exc))
            log.warning("Request failed: %s (%s)", redact(url), message)
            raise TransportError(message) from exc
        except (HttpError, InvalidResponse) as exc:
            log.warning("Error fetching %s: %s", redact(url), exc)
            raise

        if not isinstance(data, dict):
            raise InvalidResponse(f"Expected a JSON object from {redact(url)}")
        return data


def _prepare(url: str, params: dict) -> str:
    return requests.Request("GET", url, params=params).prepare().url
