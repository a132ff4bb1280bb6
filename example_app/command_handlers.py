"""Handlers for the example slash commands."""
import asyncio

from interaction_router.constants import ApplicationCommandOptionType, ApplicationCommandType
from interaction_router.observability import get_logger
from interaction_router.response_utils import create_error_embed, deferred_response, message_response

from .discord_service import DiscordService

logger = get_logger('example-app-commands')

HELLO_COMMAND = {
    "name": "hello",
    "description": "Sends the user a greeting from this application.",
    "type": ApplicationCommandType.CHAT_INPUT,
    "options": [
        {
            "name": "name",
            "description": "If provided, greets this user specifically",
            "type": ApplicationCommandOptionType.USER,
            "required": False
        }
    ]
}

THINK_COMMAND = {
    "name": "think",
    "description": "Bot will think before returning an answer.",
    "type": ApplicationCommandType.CHAT_INPUT
}

THINK_ANSWER = "The answer is 42"


def _is_chat_input(interaction: dict) -> bool:
    return interaction.get('data', {}).get('type', ApplicationCommandType.CHAT_INPUT) == ApplicationCommandType.CHAT_INPUT


def _bad_command_type() -> dict:
    return message_response(
        embeds=[create_error_embed('Unexpected Command Type', 'This command only supports slash invocation.')],
        ephemeral=True
    )


async def handle_hello(ctx, interaction: dict) -> dict:
    """Greet the caller, or the user given in the `name` option."""
    if not _is_chat_input(interaction):
        return _bad_command_type()

    options = interaction.get('data', {}).get('options') or []
    name_option = next((option for option in options if option.get('name') == 'name'), None)

    if name_option is None:
        return message_response(content=f"Hello from {ctx.app_name}!")

    if name_option.get('type') != ApplicationCommandOptionType.USER:
        return message_response(
            embeds=[create_error_embed('Unexpected Option Type', '`name` must be a user.')],
            ephemeral=True
        )

    return message_response(content=f"Hello from {ctx.app_name}, <@{name_option['value']}>!")


async def think(ctx, interaction: dict) -> None:
    """Wait, then replace the deferred placeholder with the answer."""
    await asyncio.sleep(ctx.think_delay)
    sent = await asyncio.to_thread(
        DiscordService.edit_original_response,
        ctx.application_id,
        interaction['token'],
        {'content': THINK_ANSWER},
        ctx.discord_token
    )
    if sent:
        logger.info("Think follow-up delivered", interaction_id=interaction.get('id'))
    else:
        logger.warning("Think follow-up not delivered", interaction_id=interaction.get('id'))


async def handle_think(ctx, interaction: dict) -> dict:
    """Acknowledge immediately and answer from a background task."""
    if not _is_chat_input(interaction):
        return _bad_command_type()

    ctx.execution.wait_until(think(ctx, interaction), name=f"think-{interaction.get('id')}")
    return deferred_response(ephemeral=True)
