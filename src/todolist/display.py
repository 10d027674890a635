"""Non-interactive, styled printing of a list."""

from typing import Optional

from rich.console import Console
from rich.text import Text

from .models import Document, Line, LineKind

HEADER_STYLES = {
    LineKind.HEADER1: "bold bright_cyan",
    LineKind.HEADER2: "bold cyan",
    LineKind.HEADER3: "bold blue",
}


def render_line(line: Line) -> Text:
    """Styled rendering of a single line."""
    if line.kind is LineKind.TODO:
        if line.completed:
            return Text.assemble(("☑", "green"), " ", (line.text, "strike dim"))
        return Text.assemble(("☐", "bright_yellow"), " ", line.text)
    if line.kind in HEADER_STYLES:
        return Text(line.text, style=HEADER_STYLES[line.kind])
    if line.kind is LineKind.BULLET:
        return Text.assemble("  ", ("•", "bright_white"), " ", line.text)
    return Text(line.text)


def print_document(document: Document, console: Optional[Console] = None) -> None:
    """
    Print a list with a header and a completion summary.

    Args:
        document: Parsed list
        console: Console to print on (default: stdout)
    """
    console = console or Console(highlight=False)

    console.print(Text(f"=== {document.name} ===", style="bold cyan"))
    console.print()

    for line in document.lines:
        console.print(render_line(line))

    if not document.has_todos:
        console.print(Text("No todos found.", style="dim"))
        return

    incomplete, complete = document.counts()
    console.print()
    console.print(Text.assemble(
        ("Summary:", "bold"), " ",
        (str(incomplete), "bright_yellow"), " incomplete, ",
        (str(complete), "green"), " complete",
    ))
