# ui.py
from typing import Optional, Sequence

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import (Button, DataTable, Input, Label, LoadingIndicator,
                             Markdown, RichLog, Static)

from models import ShowRecord

class SearchControls(Static):
    """Search bar: a title input and a button that doubles as a busy marker."""
    class QuerySubmitted(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Search anime by title:")
        with Horizontal(id="search-row"):
            yield Input(placeholder="e.g., Cowboy Bebop", id="search-input")
            yield Button("Search", id="search-button", variant="primary")

    @on(Input.Submitted, "#search-input")
    @on(Button.Pressed, "#search-button")
    def submit(self) -> None:
        # Overlapping searches are allowed, so the button stays enabled while busy.
        query = self.query_one(Input).value.strip()
        if query:
            self.post_message(self.QuerySubmitted(query))

    def set_busy(self, busy: bool) -> None:
        button = self.query_one(Button)
        button.label = "Searching…" if busy else "Search"
        button.variant = "warning" if busy else "primary"


class DetailsPane(Static):
    """Widget to display details of the highlighted show."""
    def on_mount(self) -> None:
        self.update_details(None)

    def update_details(self, show: Optional[ShowRecord]) -> None:
        if show:
            content = (
                f"## {show.title}\n\n"
                f"- **Type**: {show.type or 'N/A'}\n"
                f"- **Airing**: {'Yes' if show.is_airing else 'No'}\n"
                f"- **Aired**: {show.start_date or '?'} to {show.end_date or '?'}\n"
                f"- **Episodes**: {show.episodes or 'Unknown'}\n"
                f"- **Score**: {show.score}\n"
                f"- **Rated**: {show.rated or 'N/A'}\n"
                f"- **Members**: {show.members:,}\n"
                f"- **Link**: `{show.url}`\n"
                f"- **Poster**: `{show.image_url}`\n\n"
                f"{show.synopsis}"
            )
        else:
            content = "## Details\n\n*Highlight a show to see its details.*"
        self.query_one(Markdown).update(content)

    def compose(self) -> ComposeResult:
        yield Markdown()


class ResultsDisplay(DataTable):
    """Widget for the main results table. Rows are keyed by list position."""
    class RowSelected(Message):
        def __init__(self, position: int) -> None:
            self.position = position
            super().__init__()

    class RowHighlighted(Message):
        def __init__(self, position: Optional[int]) -> None:
            self.position = position
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("Title", "Type", "Episodes", "Score", "Rated")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value is not None:
            self.post_message(self.RowSelected(int(event.row_key.value)))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        key = event.row_key.value
        self.post_message(self.RowHighlighted(int(key) if key is not None else None))

    def update_results(self, results: Sequence[ShowRecord]) -> None:
        self.clear()
        for position, show in enumerate(results):
            self.add_row(show.title, show.type, str(show.episodes or "?"),
                         f"{show.score:.2f}", show.rated, key=str(position))


class LoadingBar(LoadingIndicator):
    """Progress indicator shown while a search is outstanding."""
    def set_loading(self, is_loading: bool) -> None:
        self.display = is_loading


class LogPane(RichLog):
    """Scrolling record of searches, outcomes and clipboard actions."""
    LEVEL_STYLES = {"info": None, "warning": "yellow", "error": "red", "detail": "dim"}

    def add_message(self, message: str, level: str = "info") -> None:
        style = self.LEVEL_STYLES[level]
        self.write(f"[{style}]{message}[/{style}]" if style else message)
