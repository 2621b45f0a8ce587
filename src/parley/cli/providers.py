"""Controller factory functions for CLI.

Centralizes creation of settings, logging and the controller from
environment variables. Hides configuration details from command
implementations.
"""

from rich.console import Console

from ..config import Settings
from ..controller import ChatController, create_controller
from ..llm import create_transport
from ..log import configure_logging

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> Settings:
    """Read settings from the environment.

    Raises:
        SystemExit: If a setting cannot be parsed
    """
    import typer

    con = console or _console
    try:
        return Settings.from_env()
    except ValueError as e:
        con.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=2)


def get_controller(console: Console | None = None) -> ChatController:
    """Create a controller with stored providers and sessions loaded.

    Environment variables:
        PARLEY_DATA_DIR: Directory holding api_list.json and sessions.json
        PARLEY_STORAGE: Storage backend ('file' or 'memory')
        PARLEY_LOG_LEVEL: Log level (debug, info, warning, error)
        PARLEY_REPLAY_SYSTEM_MESSAGES: Replay error notes to the API (true/false)
    """
    settings = get_settings(console)
    configure_logging(settings.log_level)
    return create_controller(settings, transport=create_transport("httpx"))
