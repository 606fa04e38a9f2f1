"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..client import Preferences
from ..config import ClientSettings
from ..exceptions import MealChatError, SessionBusyError
from ..session import SessionController
from .providers import get_client, login_or_exit
from .rendering import (
    preferences_table,
    print_reply,
    print_transcript,
    render_usage,
    welcome_panel,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="mealchat",
    help="Terminal client for the meal-planning assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q")


def _settings(ctx: typer.Context) -> ClientSettings:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-u",
        help="Backend URL (default: $MEALCHAT_BASE_URL or http://localhost:8080)"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Logging level: debug, info, warning, or error"
    ),
):
    """Configure logging and connection settings shared by all commands."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        settings = ClientSettings.from_env()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Error: invalid setting {escape(field)}: {escape(error['msg'])}[/red]")
        raise typer.Exit(code=1)
    if base_url:
        settings = settings.model_copy(update={"base_url": base_url})
    ctx.obj = settings


@app.command()
def register(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=False,
        help="Password (at least 6 characters)"
    ),
):
    """Create a new account."""
    async def _register():
        confirm = typer.prompt("Confirm password", hide_input=True)
        client = get_client(_settings(ctx))
        try:
            await client.register(email, password, confirm)
            console.print("[green]Account created. You can now start chatting with: mealchat chat[/green]")
        except MealChatError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_register())


@app.command()
def preferences(
    ctx: typer.Context,
    dietary: str | None = typer.Option(
        None,
        "--dietary",
        "-d",
        help="Dietary restrictions, comma separated (e.g. 'vegetarian, gluten-free')"
    ),
    max_time: int | None = typer.Option(
        None,
        "--max-time",
        "-t",
        min=0,
        help="Maximum cooking time in minutes (0 for no limit)"
    ),
):
    """Show or update meal-planning preferences."""
    async def _preferences():
        settings = _settings(ctx)
        client = get_client(settings)
        try:
            await login_or_exit(client, settings, console)
            current = await client.get_preferences()

            if dietary is not None or max_time is not None:
                updated = Preferences(
                    dietary_restrictions=dietary if dietary is not None else current.dietary_restrictions,
                    max_cooking_time=max_time if max_time is not None else current.max_cooking_time,
                )
                current = await client.update_preferences(updated)
                console.print("[green]Preferences saved successfully![/green]")

            console.print(preferences_table(current))
        except MealChatError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_preferences())


@app.command()
def chat(ctx: typer.Context):
    """Interactive chat with the meal-planning assistant."""
    async def _chat():
        settings = _settings(ctx)
        client = get_client(settings)
        try:
            await login_or_exit(client, settings, console)
            controller = SessionController(client.chat_transport())

            console.print(welcome_panel())

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/usage":
                    console.print(render_usage(controller.get_state().usage))
                    continue
                if command == "/history":
                    print_transcript(console, controller.get_state())
                    continue
                if command == "/reset":
                    try:
                        controller.reset()
                    except SessionBusyError as e:
                        console.print(f"[yellow]{e}[/yellow]")
                        continue
                    console.print("[dim]Conversation cleared.[/dim]")
                    continue

                with console.status("[dim]Assistant is thinking...[/dim]"):
                    state = await controller.submit(user_input)
                print_reply(console, state)
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command()
def health(ctx: typer.Context):
    """Check backend, database and LLM health."""
    async def _health():
        client = get_client(_settings(ctx))
        try:
            results = await client.health()
        finally:
            await client.close()

        for name, ok in results.items():
            if ok:
                console.print(f"[green]+[/green] {name}: OK")
            else:
                console.print(f"[red]x[/red] {name}: FAILED")

        if not all(results.values()):
            raise typer.Exit(code=1)

    asyncio.run(_health())


if __name__ == "__main__":
    app()
