import json
from pathlib import Path

import pytest

from eventfinder.api import TicketmasterClient
from eventfinder.models import EventRecord, SearchResult

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def search_payload() -> dict:
    return json.loads((FIXTURES / "search_toronto.json").read_text())


@pytest.fixture
def toronto_result(search_payload) -> SearchResult:
    events = [EventRecord.from_api(e) for e in search_payload["_embedded"]["events"]]
    return SearchResult(events=events, total=3, city="Toronto", page=search_payload["page"])


@pytest.fixture
def client() -> TicketmasterClient:
    return TicketmasterClient("test-key")
