"""rich renderables for a session state snapshot."""

from __future__ import annotations

from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from helios.session.state import Mode, SessionState

INPUT_HEIGHT = 3
HIGHLIGHT_STYLE = "black on cyan"

_MODE_TITLES = {
    Mode.INSERT: "Query",
    Mode.COMMAND: "Command",
    Mode.SAFE: "Safe",
}
_MODE_STYLES = {
    Mode.INSERT: "white",
    Mode.COMMAND: "yellow",
    Mode.SAFE: "yellow",
}


def highlight_line(query: str, line: str) -> Text:
    """Highlight whitespace-separated words containing the query, case-insensitively."""
    needle = query.lower()
    text = Text()
    for word in line.split():
        if needle and needle in word.lower():
            text.append(f"{word} ", style=HIGHLIGHT_STYLE)
        else:
            text.append(f"{word} ")
    return text


def render_results(state: SessionState) -> Panel:
    """Render the results panel starting at the scroll offset."""
    if not state.query_buffer or not state.results:
        return Panel(Text("No results"), title="Results", title_align="left")
    body = Text()
    for offset, line in enumerate(state.results[state.scroll :]):
        if offset:
            body.append("\n")
        body.append_text(highlight_line(state.query_buffer, line))
    return Panel(body, title="Results", title_align="left")


def render_input(state: SessionState) -> Panel:
    """Render the input box titled by the current mode."""
    return Panel(
        Text(state.query_buffer, style=_MODE_STYLES[state.mode]),
        title=_MODE_TITLES[state.mode],
        title_align="left",
    )


def render(state: SessionState) -> Layout:
    """Build the full screen layout for one frame."""
    layout = Layout()
    layout.split_column(
        Layout(name="results", ratio=1),
        Layout(name="input", size=INPUT_HEIGHT),
    )
    layout["results"].update(render_results(state))
    layout["input"].update(render_input(state))
    return layout
