"""Plain-text rendering of command descriptors for the help command."""
from typing import Iterable

from .constants import ApplicationCommandOptionType

HELP_TITLE = "**Available commands**"

_SUB_COMMAND_TYPES = (
    ApplicationCommandOptionType.SUB_COMMAND,
    ApplicationCommandOptionType.SUB_COMMAND_GROUP,
)


def format_usage(command: dict) -> str:
    """Usage string such as `/hello [name]` or `/ban <user> [reason]`."""
    parts = [f"/{command['name']}"]
    for option in command.get('options') or []:
        if option.get('type') in _SUB_COMMAND_TYPES:
            continue
        if option.get('required'):
            parts.append(f"<{option['name']}>")
        else:
            parts.append(f"[{option['name']}]")
    return " ".join(parts)


def format_command(command: dict) -> str:
    line = f"`{format_usage(command)}`"
    description = command.get('description')
    if description:
        line += f": {description}"
    return line


def format_command_set(commands: Iterable[dict]) -> str:
    """Render descriptors in the order given, one command per line."""
    lines = [HELP_TITLE]
    lines.extend(format_command(command) for command in commands)
    return "\n".join(lines)
