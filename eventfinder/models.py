from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Image:
    url: str
    width: int = 0


@dataclass
class Venue:
    name: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None      # street line, address.line1 upstream
    state: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Venue":
        return cls(
            name=data.get("name"),
            city=(data.get("city") or {}).get("name"),
            address=(data.get("address") or {}).get("line1"),
            state=(data.get("state") or {}).get("name"),
            postal_code=data.get("postalCode"),
        )


@dataclass
class PriceRange:
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None


@dataclass
class EventRecord:
    id: str
    name: Optional[str] = None
    images: list[Image] = field(default_factory=list)
    classifications: list[dict] = field(default_factory=list)
    venue: Optional[Venue] = None
    local_date: Optional[str] = None   # e.g. "2026-03-21"
    local_time: Optional[str] = None   # e.g. "19:30:00"
    price_ranges: list[PriceRange] = field(default_factory=list)
    info: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "EventRecord":
        """Build a record from a Discovery API event object, tolerating missing fields."""
        venues = (data.get("_embedded") or {}).get("venues") or []
        start = (data.get("dates") or {}).get("start") or {}

        images = [
            Image(url=img["url"], width=img.get("width") or 0)
            for img in data.get("images") or []
            if img.get("url")
        ]
        price_ranges = [
            PriceRange(min=pr.get("min"), max=pr.get("max"), currency=pr.get("currency"))
            for pr in data.get("priceRanges") or []
        ]

        return cls(
            id=str(data.get("id", "")),
            name=data.get("name"),
            images=images,
            classifications=list(data.get("classifications") or []),
            venue=Venue.from_api(venues[0]) if venues else None,
            local_date=start.get("localDate"),
            local_time=start.get("localTime"),
            price_ranges=price_ranges,
            info=data.get("info"),
            url=data.get("url"),
        )


@dataclass
class SearchResult:
    events: list[EventRecord]          # upstream order, never re-sorted
    total: int
    city: str
    page: dict[str, Any] = field(default_factory=dict)

    def find(self, event_id: str) -> Optional[EventRecord]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None


@dataclass(frozen=True)
class DisplayModel:
    event_id: str
    name: str
    image_url: str
    category: str
    date: str
    price: str
    venue_name: str
    venue_line: str
    address: str
    ticket_url: Optional[str] = None
    info: Optional[str] = None         # None omits the info row in the detail view
