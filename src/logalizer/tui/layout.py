"""
Layout and renderables for the viewer screen.

Screen structure:
+-----------------------------------------------------------+
|  [0] kernel (12)  [1] systemd (40)  [2] syslog (311)      |  tab bar (3 rows)
+-----------------------------------------------------------+
|     0 [2] Jan 01 00:00:01 host boot                       |
|     1 [0] Jan 01 00:00:02 host kernel: eth0 up            |  lines (flex)
|         |> link speed 1000Mb/s                            |
+-----------------------------------------------------------+
 q quit  0-9 toggle  up/down scroll  c comments     12/363    footer (1 row)

Each tab gets a colour from a seven-colour palette by id. Disabled tabs
are drawn reversed in the tab bar. Every line and comment is rendered on
exactly one row so the viewer can count rows without measuring.
"""

from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from logalizer.types import LineView, Tab

TAB_COLORS = ("white", "yellow", "green", "cyan", "blue", "magenta", "red")

TAB_BAR_SIZE = 3
FOOTER_SIZE = 1
# Top and bottom border of the lines panel
PANEL_CHROME = 2


def tab_style(tab_id: int, enabled: bool = True) -> Style:
    """Colour for a tab; reversed when the tab is disabled."""
    return Style(color=TAB_COLORS[tab_id % len(TAB_COLORS)], reverse=not enabled)


def format_tab_title(tab: Tab, name_width: int = 16) -> str:
    """
    Format a tab bar entry as "[id] name (count)".

    Long names keep their last name_width characters, which keeps the
    file name of a long path visible.
    """
    name = tab.name
    if len(name) > name_width:
        name = name[-name_width:]
    return f"[{tab.tab_id}] {name} ({tab.count})"


def make_tab_bar(tabs: list[Tab], name_width: int = 16) -> Text:
    """Build the one-row tab bar."""
    bar = Text(no_wrap=True, overflow="ellipsis")
    for tab in tabs:
        if bar:
            bar.append("  ")
        bar.append(format_tab_title(tab, name_width), style=tab_style(tab.tab_id, tab.enabled))
    return bar


def make_line_text(line: LineView) -> Text:
    """Render a line as "    id [tab] text" in its tab colour."""
    return Text(
        f"{line.id:>6} [{line.tab_id}] {line.text}",
        style=tab_style(line.tab_id),
        no_wrap=True,
        overflow="ellipsis",
    )


def make_comment_text(line: LineView) -> Text:
    """Render a line's comment below it. Multi-line output is joined."""
    comment = " ".join(line.comment.splitlines()) if line.comment else ""
    return Text(
        f"        |> {comment}",
        style=Style(color=TAB_COLORS[line.tab_id % len(TAB_COLORS)], dim=True),
        no_wrap=True,
        overflow="ellipsis",
    )


def make_footer(anchor: int, line_count: int, show_comments: bool) -> Text:
    """Key help on the left, scroll position on the right."""
    comments = "on" if show_comments else "off"
    footer = Text(
        f" q quit  0-9 toggle  up/down scroll  c comments ({comments})",
        style="dim",
        no_wrap=True,
    )
    position = f"{anchor}/{line_count} "
    footer.append(" ")
    footer.append(position, style="bold")
    return footer


def make_panel(content: RenderableType, title: str, style: str = "blue") -> Panel:
    """
    Create a styled panel with content.

    Args:
        content: Renderable for the panel body
        title: Panel title (will be bolded)
        style: Border style color (default "blue")

    Returns:
        Panel with formatted title and border style
    """
    return Panel(
        content,
        title=f"[bold]{title}[/bold]",
        border_style=style,
        padding=(0, 1),
    )


def make_lines_panel(rows: list[Text], title: str = "Lines") -> Panel:
    return make_panel(Group(*rows), title, "cyan")


def create_layout() -> Layout:
    """
    Create the viewer layout.

    Named regions:
    - tabs: tab bar panel, fixed height
    - lines: visible lines panel, takes the remaining height
    - footer: key help and position, one row

    Returns:
        Layout with 3 named regions
    """
    layout = Layout(name="root")
    layout.split_column(
        Layout(name="tabs", size=TAB_BAR_SIZE),
        Layout(name="lines", ratio=1),
        Layout(name="footer", size=FOOTER_SIZE),
    )
    return layout
