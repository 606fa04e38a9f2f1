"""Client factory functions for CLI.

Centralizes creation of the backend client and the login step from
environment variables and prompts. Hides configuration details from
command implementations.
"""

import typer
from rich.console import Console

from ..client import BackendClient, Credentials
from ..config import ClientSettings
from ..exceptions import MealChatError

# Default console for output
_console = Console()


def get_client(settings: ClientSettings) -> BackendClient:
    """Create a backend client from settings.

    Args:
        settings: Connection settings

    Returns:
        Backend client (not yet logged in)
    """
    return BackendClient(base_url=settings.base_url, timeout=settings.timeout)


def prompt_credentials(settings: ClientSettings) -> Credentials:
    """Use credentials from settings, prompting for whatever is missing."""
    email = settings.email or typer.prompt("Email")
    password = settings.password or typer.prompt("Password", hide_input=True)
    return Credentials(email=email, password=password)


async def login_or_exit(
    client: BackendClient,
    settings: ClientSettings,
    console: Console | None = None
) -> None:
    """Log the client in, exiting the CLI on failure.

    Raises:
        typer.Exit: If login fails
    """
    con = console or _console
    credentials = prompt_credentials(settings)
    try:
        await client.login(credentials)
    except MealChatError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    con.print(f"[dim]Signed in as {credentials.email}[/dim]")
