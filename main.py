# main.py
import argparse
import dataclasses
import logging
from typing import Optional

try:
    import pyperclip
except ImportError:
    pyperclip = None

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.logging import TextualHandler
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input

from config import Config
from controller import SearchController
from models import SearchState, ShowRecord
from services import ShowCatalogClient
from ui import DetailsPane, LoadingBar, LogPane, ResultsDisplay, SearchControls

class AnimeSearchApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_link", "Copy Link"),
    ]
    CSS = """
    #app-grid { height: 1fr; }
    #left-pane { width: 3fr; }
    #right-pane { width: 2fr; }
    #loading { height: 1; }
    #log { height: 8; border-top: solid $accent; }
    """

    search_state = reactive(SearchState(), always_update=True)

    def __init__(self, controller: SearchController, config: Config):
        super().__init__()
        self.controller = controller
        self.config = config
        self.highlighted: Optional[ShowRecord] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            with Horizontal(id="app-grid"):
                with Vertical(id="left-pane"):
                    yield SearchControls()
                    yield LoadingBar(id="loading")
                    yield ResultsDisplay(id="results-table")
                with Vertical(id="right-pane"):
                    yield DetailsPane(id="details-pane")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.config.BASE_URL
        self.query_one(Input).focus()
        if not pyperclip:
            self.query_one(LogPane).add_message("⚠️ 'pyperclip' not installed.", "warning")
        self.controller.subscribe(self._on_state_published)
        if self.controller.default_query.strip():
            self.query_one(LogPane).add_message(f"🔎 Searching for '{self.controller.default_query}'...")
        self.controller.initialize()

    def on_unmount(self) -> None:
        self.controller.close()

    def _on_state_published(self, state: SearchState) -> None:
        self.search_state = state

    def watch_search_state(self, old_state: SearchState, new_state: SearchState) -> None:
        """Pushes controller state changes to child widgets."""
        self.query_one(LoadingBar).set_loading(new_state.is_loading)
        self.query_one(SearchControls).set_busy(new_state.is_loading)
        if old_state.results != new_state.results:
            self.highlighted = None
            self.query_one(ResultsDisplay).update_results(new_state.results)
            self.query_one(DetailsPane).update_details(None)

        log = self.query_one(LogPane)
        if new_state.error and new_state.error != old_state.error:
            log.add_message("❌ An error occurred during search.", "error")
            log.add_message(new_state.error, "detail")
        elif old_state.is_loading and not new_state.is_loading and not new_state.error:
            if new_state.results:
                log.add_message(f"📺 Found {len(new_state.results)} shows.")
            else:
                log.add_message("🤷 No shows found.")

    def action_copy_link(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("❌ 'pyperclip' not installed.", "error")
            return
        if self.highlighted:
            pyperclip.copy(self.highlighted.url)
            log.add_message(f"📋 Copied link for '[b]{self.highlighted.title}[/b]'.")
        else:
            log.add_message("⚠️ No show highlighted.", "warning")

    def on_search_controls_query_submitted(self, message: SearchControls.QuerySubmitted) -> None:
        self.query_one(LogPane).add_message(f"🔎 Searching for '{message.query}'...")
        self.controller.submit_query(message.query)

    def on_results_display_row_selected(self, message: ResultsDisplay.RowSelected) -> None:
        self.controller.item_selected(message.position)

    def on_results_display_row_highlighted(self, message: ResultsDisplay.RowHighlighted) -> None:
        results = self.search_state.results
        if message.position is not None and message.position < len(results):
            self.highlighted = results[message.position]
        else:
            self.highlighted = None
        self.query_one(DetailsPane).update_details(self.highlighted)


def parse_args(argv=None) -> Config:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Search the anime catalog by title.")
    parser.add_argument("--base-url", default=defaults.BASE_URL,
                        help=f"Catalog search endpoint (default: {defaults.BASE_URL}).")
    parser.add_argument("-q", "--query", default=defaults.DEFAULT_QUERY,
                        help=f"Search to run at startup (default: {defaults.DEFAULT_QUERY}).")
    parser.add_argument("--timeout", type=float, default=defaults.REQUEST_TIMEOUT,
                        help="Request timeout in seconds (default: none).")
    parser.add_argument("--log-level", default=defaults.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if not args.query.strip():
        parser.error("--query must not be blank")
    return dataclasses.replace(
        defaults,
        BASE_URL=args.base_url,
        DEFAULT_QUERY=args.query,
        REQUEST_TIMEOUT=args.timeout,
        LOG_LEVEL=args.log_level,
    )


def main(argv=None) -> None:
    app_config = parse_args(argv)
    logging.basicConfig(level=app_config.LOG_LEVEL, handlers=[TextualHandler()])

    catalog_client = ShowCatalogClient(app_config.BASE_URL, timeout=app_config.REQUEST_TIMEOUT)
    controller = SearchController(catalog_client, default_query=app_config.DEFAULT_QUERY)
    app = AnimeSearchApp(controller, app_config)

    try:
        app.run()
    finally:
        catalog_client.close()


if __name__ == "__main__":
    main()
