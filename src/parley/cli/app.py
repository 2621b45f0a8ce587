"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..controller import ChatController
from ..exchange import ExchangeOutcome, NoProviderError
from ..providers import ProviderConfig
from .providers import get_controller
from .rendering import render_message, render_providers_table, render_sessions_table

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="parley",
    help="Chat with OpenAI-compatible APIs in named, persisted sessions",
    no_args_is_help=True,
    add_completion=True,
)
providers_app = typer.Typer(help="Manage configured APIs", no_args_is_help=True)
sessions_app = typer.Typer(help="Manage chat sessions", no_args_is_help=True)
app.add_typer(providers_app, name="providers")
app.add_typer(sessions_app, name="sessions")

# Console for rich output
console = Console()

EXIT_COMMANDS = {"exit", "quit", "q"}

CHAT_HELP = """\
Commands
  /new [name]   start a new session (default name: Session N)
  /switch N     switch to session N
  /sessions     list sessions
  /history      show the active session's transcript
  /remove       remove the active session
  /clear        remove all sessions
  /providers    list configured APIs
  /use N        use API N
  /retry        send the last unsent message again
  /help         show this help
  exit, quit, q leave the chat"""


def _apply_selection(controller: ChatController, session: int | None, provider: int | None) -> None:
    try:
        if session is not None:
            controller.select_session(session)
        if provider is not None:
            controller.select_provider(provider)
    except IndexError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _print_transcript(controller: ChatController) -> None:
    session = controller.store.active_session
    console.rule(escape(session.display_name))
    if not session.transcript:
        console.print("[dim]No messages yet.[/dim]")
    for message in session.transcript:
        console.print(render_message(message))


def _print_outcome(outcome: ExchangeOutcome | None) -> None:
    if outcome is None:
        console.print("[yellow]No API selected. Add one with 'parley providers add'.[/yellow]")
        return
    console.print(render_message(outcome.appended[-1]))
    if not outcome.succeeded:
        console.print("[dim]Message kept; type /retry to send it again.[/dim]")


async def _run_chat_command(controller: ChatController, line: str) -> None:
    """Execute one slash command inside the interactive chat."""
    name, _, arg = line.partition(" ")
    name = name.lower()
    arg = arg.strip()

    if name == "/help":
        console.print(CHAT_HELP, markup=False, highlight=False)

    elif name == "/new":
        session = controller.create_session(arg or None)
        console.print(f"[green]Started {escape(session.display_name)}[/green]")

    elif name in ("/switch", "/use"):
        try:
            index = int(arg)
            if name == "/switch":
                controller.select_session(index)
                _print_transcript(controller)
            else:
                config = controller.select_provider(index)
                console.print(f"[green]Using {escape(config.label)}[/green]")
        except ValueError:
            console.print(f"[red]Usage: {name} N[/red]")
        except IndexError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")

    elif name == "/sessions":
        console.print(render_sessions_table(controller.store))

    elif name == "/history":
        _print_transcript(controller)

    elif name == "/remove":
        removed = controller.remove_active_session()
        if removed is None:
            console.print("[yellow]Only one session left; it was cleared instead.[/yellow]")
        else:
            console.print(f"[green]Removed {escape(removed.display_name)}[/green]")
        _print_transcript(controller)

    elif name == "/clear":
        if typer.confirm("Remove all sessions?"):
            controller.clear_all_sessions()
            console.print("[green]All sessions removed.[/green]")

    elif name == "/providers":
        console.print(render_providers_table(controller.registry))

    elif name == "/retry":
        if not controller.input_buffer:
            console.print("[dim]Nothing to retry.[/dim]")
        else:
            console.print(f"[dim]Resending: {escape(controller.input_buffer)}[/dim]")
            _print_outcome(await controller.send())

    else:
        console.print(f"[red]Unknown command: {escape(name)}[/red] (type /help)")


@app.command()
def chat(
    session: int | None = typer.Option(None, "--session", "-s", help="Session index to make active"),
    provider: int | None = typer.Option(None, "--provider", "-p", help="API index to use")
):
    """Interactive chat on the active session."""
    async def _chat():
        controller = get_controller(console)
        try:
            _apply_selection(controller, session, provider)

            console.print("[bold cyan]Parley Chat[/bold cyan]")
            console.print("[dim]Type /help for commands, 'exit' to leave[/dim]\n")
            active = controller.registry.active_provider()
            if active is not None:
                console.print(f"[dim]API: {escape(active.label)}[/dim]")
            _print_transcript(controller)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in EXIT_COMMANDS:
                        console.print("[dim]Goodbye![/dim]")
                        break

                    if user_input.startswith("/"):
                        await _run_chat_command(controller, user_input.strip())
                        continue

                    _print_outcome(await controller.send(user_input))

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await controller.close()

    asyncio.run(_chat())


@app.command()
def send(
    text: str = typer.Argument(..., help="Message to send"),
    session: int | None = typer.Option(None, "--session", "-s", help="Session index to make active"),
    provider: int | None = typer.Option(None, "--provider", "-p", help="API index to use")
):
    """Send a single message and print the reply."""
    async def _send():
        controller = get_controller(console)
        try:
            _apply_selection(controller, session, provider)
            try:
                controller.require_provider()
            except NoProviderError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                raise typer.Exit(code=1)

            outcome = await controller.send(text)
            _print_outcome(outcome)
            if outcome is None or not outcome.succeeded:
                raise typer.Exit(code=1)
        finally:
            await controller.close()

    asyncio.run(_send())


@providers_app.command("add")
def providers_add(
    name: str = typer.Argument(..., help="Display name"),
    url: str = typer.Argument(..., help="Chat completion endpoint URL"),
    api_key: str = typer.Argument(..., help="API key sent as a bearer token"),
    model: str = typer.Argument(..., help="Model identifier, e.g. gpt-4o-mini")
):
    """Add an API configuration."""
    async def _add():
        controller = get_controller(console)
        try:
            config = ProviderConfig(
                display_name=name,
                endpoint_url=url,
                credential=api_key,
                model_identifier=model
            )
            index = controller.add_provider(config)
            console.print(f"[green]Added API #{index}: {escape(config.label)}[/green]")
        finally:
            await controller.close()

    asyncio.run(_add())


@providers_app.command("list")
def providers_list():
    """List configured APIs."""
    async def _list():
        controller = get_controller(console)
        try:
            if not len(controller.registry):
                console.print("[dim]No APIs configured.[/dim]")
                return
            console.print(render_providers_table(controller.registry))
        finally:
            await controller.close()

    asyncio.run(_list())


@sessions_app.command("list")
def sessions_list():
    """List sessions."""
    async def _list():
        controller = get_controller(console)
        try:
            console.print(render_sessions_table(controller.store))
        finally:
            await controller.close()

    asyncio.run(_list())


@sessions_app.command("show")
def sessions_show(index: int = typer.Argument(0, help="Session index")):
    """Print a session's transcript."""
    async def _show():
        controller = get_controller(console)
        try:
            _apply_selection(controller, index, None)
            _print_transcript(controller)
        finally:
            await controller.close()

    asyncio.run(_show())


@sessions_app.command("new")
def sessions_new(name: str | None = typer.Argument(None, help="Session name")):
    """Create a session."""
    async def _new():
        controller = get_controller(console)
        try:
            created = controller.create_session(name)
            console.print(f"[green]Created {escape(created.display_name)}[/green]")
        finally:
            await controller.close()

    asyncio.run(_new())


@sessions_app.command("remove")
def sessions_remove(index: int = typer.Argument(0, help="Session index")):
    """Remove a session (the last one is cleared instead)."""
    async def _remove():
        controller = get_controller(console)
        try:
            _apply_selection(controller, index, None)
            removed = controller.remove_active_session()
            if removed is None:
                console.print("[yellow]Only one session left; it was cleared instead.[/yellow]")
            else:
                console.print(f"[green]Removed {escape(removed.display_name)}[/green]")
        finally:
            await controller.close()

    asyncio.run(_remove())


@sessions_app.command("clear")
def sessions_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation")
):
    """Remove every session and start over with a default one."""
    async def _clear():
        controller = get_controller(console)
        try:
            if not yes and not typer.confirm("Remove all sessions?"):
                console.print("[dim]Aborted.[/dim]")
                return
            controller.clear_all_sessions()
            console.print("[green]All sessions removed.[/green]")
        finally:
            await controller.close()

    asyncio.run(_clear())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
