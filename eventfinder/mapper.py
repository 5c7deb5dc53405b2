"""Raw EventRecord -> render-ready DisplayModel. Everything here is pure."""

from typing import Optional

from dateutil import parser as dateparser

from eventfinder.models import DisplayModel, EventRecord, Image, PriceRange, Venue

PLACEHOLDER_IMAGE = "https://via.placeholder.com/640x360?text=No+Image+Available"
MIN_IMAGE_WIDTH = 640

# en-US names, independent of the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def get_event_image(images: Optional[list[Image]]) -> str:
    """First image at least MIN_IMAGE_WIDTH wide, else the first image, else a placeholder."""
    if not images:
        return PLACEHOLDER_IMAGE
    for img in images:
        if img.width >= MIN_IMAGE_WIDTH:
            return img.url
    return images[0].url


def get_event_category(classifications: Optional[list[dict]]) -> str:
    if not classifications:
        return "Event"
    segment = classifications[0].get("segment") or {}
    return segment.get("name") or "Event"


def format_date(local_date: Optional[str], local_time: Optional[str] = None) -> str:
    """'2026-03-21', '19:30:00' -> 'Sat, Mar 21, 2026 at 19:30:00'."""
    if not local_date:
        return "Date TBA"
    try:
        d = dateparser.isoparse(local_date).date()
    except (ValueError, OverflowError):
        return "Date TBA"

    formatted = f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}, {d.year}"
    if local_time:
        return f"{formatted} at {local_time}"
    return formatted


def get_price_range(price_ranges: Optional[list[PriceRange]]) -> str:
    if not price_ranges:
        return "Price not available"

    first = price_ranges[0]
    low = first.min if first.min is not None else first.max
    high = first.max if first.max is not None else first.min
    if low is None:
        return "Price not available"

    currency = first.currency or "USD"
    if low == high:
        return f"{currency} ${low:.2f}"
    return f"{currency} ${low:.2f} - ${high:.2f}"


def venue_line(venue: Optional[Venue]) -> str:
    name = venue.name if venue and venue.name else "Venue TBA"
    city = venue.city if venue and venue.city else "City TBA"
    return f"{name}, {city}"


def full_address(venue: Optional[Venue]) -> str:
    if venue is None:
        return "Address TBA"
    region = f"{venue.state or ''} {venue.postal_code or ''}".strip()
    parts = [p.strip() for p in (venue.address or "", venue.city or "", region) if p and p.strip()]
    return ", ".join(parts) or "Address TBA"


def to_display(event: EventRecord) -> DisplayModel:
    venue = event.venue
    return DisplayModel(
        event_id=event.id,
        name=event.name or "Unknown Event",
        image_url=get_event_image(event.images),
        category=get_event_category(event.classifications),
        date=format_date(event.local_date, event.local_time),
        price=get_price_range(event.price_ranges),
        venue_name=venue.name if venue and venue.name else "Venue TBA",
        venue_line=venue_line(venue),
        address=full_address(venue),
        ticket_url=event.url,
        info=event.info or None,
    )


def results_title(city: str) -> str:
    return f"Events in {city}"


def results_count(count: int) -> str:
    return f"Found {count} event{'' if count == 1 else 's'}"
