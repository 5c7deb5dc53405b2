from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from eventfinder import mapper
from eventfinder.controller import Status, UIState

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Discovery API segment names offered in the category selector
CATEGORIES = ["Music", "Sports", "Arts & Theatre", "Film", "Miscellaneous"]
CITY_HINT = "e.g., Toronto, Vancouver, Montreal, Saskatoon"


class PageRenderer:
    """Renders the search page from a controller state snapshot."""

    def __init__(self, site_title: str = "Event Finder", base_url: str = ""):
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
        )
        self.env.globals["site_title"] = site_title
        self.env.globals["base_url"] = base_url.rstrip("/")
        self.env.globals["generated_date"] = date.today().isoformat()

    def render(self, state: UIState, city: str = "", category: str = "") -> str:
        show_results = state.status is Status.RESULTS and state.result is not None
        cards = [mapper.to_display(e) for e in state.result.events] if show_results else []

        context = {
            "state": state,
            "loading": state.status is Status.LOADING,
            "error": state.message if state.status is Status.ERROR else None,
            "detail_error": state.detail_error,
            "show_results": show_results,
            "results_title": mapper.results_title(state.result.city) if show_results else "",
            "results_count": mapper.results_count(len(cards)),
            "cards": cards,
            "modal": mapper.to_display(state.modal) if state.modal is not None else None,
            "city": city or (state.result.city if state.result else ""),
            "category": category,
            "categories": CATEGORIES,
            "city_hint": CITY_HINT,
        }
        return self.env.get_template("index.html").render(**context)

    def write_page(self, state: UIState, output_dir: Path, **kwargs) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        dest = output_dir / "index.html"
        dest.write_text(self.render(state, **kwargs), encoding="utf-8")
        return dest
