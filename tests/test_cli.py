import sys

import pytest
import responses as rsps

from eventfinder import cli
from eventfinder.api import BASE_URL


@pytest.fixture
def api_key(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TICKETMASTER_API_KEY", "cli-key")


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["ef", *argv])
    cli.main()


@rsps.activate
def test_search_prints_results_and_writes_page(monkeypatch, capsys, tmp_path, api_key, search_payload):
    rsps.add(rsps.GET, f"{BASE_URL}/events.json", json=search_payload)

    _run(monkeypatch, "search", "Toronto", "--output", str(tmp_path / "site"))

    out = capsys.readouterr().out
    assert "Events in Toronto" in out
    assert "Found 3 events" in out
    assert "Raptors vs. Celtics" in out
    assert "Events in Toronto" in (tmp_path / "site" / "index.html").read_text(encoding="utf-8")


@rsps.activate
def test_search_error_goes_to_stderr(monkeypatch, capsys, tmp_path, api_key):
    rsps.add(rsps.GET, f"{BASE_URL}/events.json", status=502)

    _run(monkeypatch, "search", "Toronto", "--output", str(tmp_path / "site"))

    assert "Server error. Please try again later." in capsys.readouterr().err


@rsps.activate
def test_show_with_city_uses_search_results(monkeypatch, capsys, api_key, search_payload):
    rsps.add(rsps.GET, f"{BASE_URL}/events.json", json=search_payload)

    _run(monkeypatch, "show", "Z7r9jZ1AdJ8uP", "--city", "Toronto")

    out = capsys.readouterr().out
    assert "Jazz at the Rex" in out
    assert "CAD $20.00" in out
    assert len(rsps.calls) == 1


@rsps.activate
def test_browse_session(monkeypatch, capsys, tmp_path, api_key, search_payload):
    import io

    rsps.add(rsps.GET, f"{BASE_URL}/events.json", json=search_payload)
    monkeypatch.setattr(sys, "stdin", io.StringIO("search Toronto | Sports\nopen 1\nesc\nquit\n"))

    _run(monkeypatch, "browse", "--output", str(tmp_path / "site"))

    out = capsys.readouterr().out
    assert "Found 3 events" in out
    assert "Scotiabank Arena" in out
    assert "classificationName=Sports" in rsps.calls[0].request.url
    page = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
    assert 'id="eventModal" class="modal hidden"' in page


def test_missing_api_key_exits(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TICKETMASTER_API_KEY", "placeholder")
    monkeypatch.delenv("TICKETMASTER_API_KEY")

    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "search", "Toronto")

    assert exc_info.value.code == 1
    assert "TICKETMASTER_API_KEY" in capsys.readouterr().err
