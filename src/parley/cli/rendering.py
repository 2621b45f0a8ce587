"""Rendering helpers for the CLI.

Hides the details of how messages, sessions and providers look in a terminal.
"""

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..providers import ProviderRegistry
from ..sessions import Message, Role, SessionStore

# User green, assistant blue, errors red
ROLE_STYLES = {
    Role.USER: "#48db78",
    Role.ASSISTANT: "#4285f4",
    Role.SYSTEM: "#ea4335",
}

ROLE_LABELS = {
    Role.USER: "You",
    Role.ASSISTANT: "Assistant",
    Role.SYSTEM: "System",
}

CODE_FENCE = "```"


def render_message(message: Message) -> RenderableType:
    """Render one transcript entry.

    Assistant replies are rendered as markdown so fenced code blocks
    show up as code; other roles are plain styled text.
    """
    style = ROLE_STYLES[message.sender_role]
    label = Text(f"{ROLE_LABELS[message.sender_role]}:", style=f"bold {style}")
    if message.sender_role is Role.ASSISTANT or CODE_FENCE in message.content:
        return Group(label, Markdown(message.content))
    return Text.assemble(label, " ", Text(message.content, style=style))


def render_sessions_table(store: SessionStore) -> Table:
    table = Table(title="Sessions")
    table.add_column("", style="bold")
    table.add_column("#", justify="right")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Messages", justify="right")
    for index, session in enumerate(store.sessions):
        table.add_row(
            "*" if index == store.active_index else "",
            str(index),
            str(session.ordinal_id),
            escape(session.display_name),
            str(len(session.transcript)),
        )
    return table


def render_providers_table(registry: ProviderRegistry) -> Table:
    table = Table(title="APIs")
    table.add_column("", style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("URL")
    table.add_column("Model")
    for index, config in enumerate(registry):
        table.add_row(
            "*" if index == registry.active_index else "",
            str(index),
            escape(config.display_name),
            escape(config.endpoint_url),
            escape(config.model_identifier),
        )
    return table
