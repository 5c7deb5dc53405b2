import argparse
import logging
import sys
from pathlib import Path

from eventfinder import __version__
import eventfinder.config as cfg_module
from eventfinder import mapper
from eventfinder.api import TicketmasterClient
from eventfinder.controller import EventFinderController, Status, UIState
from eventfinder.errors import ConfigError
from eventfinder.view import PageRenderer


def _make_controller(cfg: dict) -> EventFinderController:
    api_key = cfg_module.get_api_key(cfg)
    client = TicketmasterClient.from_config(cfg_module.get_api(cfg), api_key)
    return EventFinderController(client)


def _make_renderer(cfg: dict) -> PageRenderer:
    site_cfg = cfg_module.get_site(cfg)
    return PageRenderer(
        site_title=site_cfg.get("title", "Event Finder"),
        base_url=site_cfg.get("base_url", ""),
    )


def _print_results(state: UIState) -> None:
    if state.status is Status.ERROR:
        print(state.message, file=sys.stderr)
        return
    if state.status is not Status.RESULTS or state.result is None:
        return

    print(mapper.results_title(state.result.city))
    print(mapper.results_count(len(state.result.events)))
    for i, event in enumerate(state.result.events, start=1):
        card = mapper.to_display(event)
        print(f"  [{i}] {card.name}  ({card.category})")
        print(f"      {card.date} | {card.venue_line} | {card.price}  id={card.event_id}")


def _print_detail(state: UIState) -> None:
    if state.detail_error:
        print(state.detail_error, file=sys.stderr)
        return
    if state.modal is None:
        return

    detail = mapper.to_display(state.modal)
    print(f"{detail.name}  [{detail.category}]")
    print(f"  Date:        {detail.date}")
    print(f"  Venue:       {detail.venue_name}")
    print(f"  Address:     {detail.address}")
    print(f"  Price Range: {detail.price}")
    if detail.info:
        print(f"  Info:        {detail.info}")
    if detail.ticket_url:
        print(f"  Tickets:     {detail.ticket_url}")


def _search(args, cfg):
    controller = _make_controller(cfg)
    renderer = _make_renderer(cfg)
    output_dir = Path(args.output) if args.output else cfg_module.get_output_dir(cfg)

    state = controller.submit(args.city, args.category)
    _print_results(state)
    dest = renderer.write_page(state, output_dir, city=args.city, category=args.category)
    print(f"Page written to '{dest}'.")


def _show(args, cfg):
    controller = _make_controller(cfg)
    if args.city:
        # Populate the current results so the card lookup can stay local
        controller.submit(args.city, args.category)
    controller.select_card(args.event_id)
    _print_detail(controller.state)


def _resolve_card(controller: EventFinderController, ref: str) -> str:
    """Accept either a 1-based card number from the last listing or an event id."""
    result = controller.state.result
    if ref.isdigit() and result is not None and 1 <= int(ref) <= len(result.events):
        return result.events[int(ref) - 1].id
    return ref


def _browse(args, cfg):
    controller = _make_controller(cfg)
    renderer = _make_renderer(cfg)
    output_dir = Path(args.output) if args.output else cfg_module.get_output_dir(cfg)
    controller.subscribe(lambda state: renderer.write_page(state, output_dir))

    print("Commands: search CITY [| CATEGORY], open N|ID, close, esc, quit")
    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        command, _, rest = line.partition(" ")
        command = command.lower()

        if command in ("quit", "exit"):
            break
        elif command == "search":
            city, _, category = rest.partition("|")
            _print_results(controller.submit(city.strip(), category.strip()))
        elif command == "open" and rest:
            ref = rest.split()[0]
            controller.select_card(_resolve_card(controller, ref))
            _print_detail(controller.state)
        elif command == "close":
            controller.close_modal()
        elif command == "esc":
            controller.on_keydown("Escape")
        else:
            print(f"Unknown command: {line}", file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(
        prog="ef",
        description="Find events in a city via the Ticketmaster Discovery API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", default="config.toml", metavar="PATH",
        help="Path to config.toml (default: config.toml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # search
    sp_search = subparsers.add_parser("search", help="Search events in a city and write the results page")
    sp_search.add_argument("city", help="City name, e.g. Toronto")
    sp_search.add_argument("--category", default="", metavar="NAME",
                           help="Classification name, e.g. Music or Sports")
    sp_search.add_argument("--output", metavar="DIR", help="Output directory (default: [site] output_dir)")

    # show
    sp_show = subparsers.add_parser("show", help="Show the details of one event")
    sp_show.add_argument("event_id", help="Discovery API event id")
    sp_show.add_argument("--city", help="Search this city first and look the event up in its results")
    sp_show.add_argument("--category", default="", metavar="NAME")

    # browse
    sp_browse = subparsers.add_parser("browse", help="Interactive session reading commands from stdin")
    sp_browse.add_argument("--output", metavar="DIR", help="Output directory (default: [site] output_dir)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = cfg_module.load(Path(args.config))
        if args.command == "search":
            _search(args, cfg)
        elif args.command == "show":
            _show(args, cfg)
        elif args.command == "browse":
            _browse(args, cfg)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
