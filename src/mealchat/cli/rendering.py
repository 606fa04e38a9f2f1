"""Rich renderables for chat sessions and preferences."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..client import Preferences
from ..session import Role, SessionState, Turn, UsageSnapshot

ROLE_LABELS = {
    Role.USER: ("You", "bold yellow"),
    Role.ASSISTANT: ("Assistant", "bold green"),
}


def render_turn(turn: Turn) -> Text:
    label, style = ROLE_LABELS[turn.role]
    text = Text()
    text.append(f"{label}: ", style=style)
    text.append(turn.content)
    return text


def render_usage(usage: UsageSnapshot | None) -> Text:
    if usage is None:
        return Text("Usage: unknown", style="dim")
    text = Text("Usage: ", style="dim")
    text.append(usage.summary(), style="bold cyan")
    return text


def print_reply(console: Console, state: SessionState) -> None:
    """Print the outcome of the most recent submission."""
    if state.last_error:
        console.print(f"[red]{state.last_error}[/red]\n")
        return
    turn = state.last_turn
    if turn is not None and turn.role == Role.ASSISTANT:
        console.print(render_turn(turn))
    if state.usage is not None:
        console.print(render_usage(state.usage))
    console.print()


def print_transcript(console: Console, state: SessionState) -> None:
    if not state.transcript:
        console.print("[dim]Start a conversation![/dim]")
        return
    for turn in state.transcript:
        console.print(render_turn(turn))


def preferences_table(preferences: Preferences) -> Table:
    table = Table(title="Preferences", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row(
        "Dietary restrictions",
        ", ".join(preferences.restriction_list()) or "None"
    )
    table.add_row(
        "Max cooking time",
        f"{preferences.max_cooking_time} min" if preferences.max_cooking_time else "No limit"
    )
    return table


def welcome_panel() -> Panel:
    return Panel(
        "Tell me what ingredients you have, and I'll suggest healthy recipes!\n"
        "[dim]Example: \"I have chicken, rice, and broccoli\"[/dim]\n"
        "[dim]Commands: /usage, /history, /reset, exit[/dim]",
        title="Meal Planning Assistant",
        border_style="cyan",
    )
