"""Builders for interaction response payloads."""
from typing import Any, Dict, List, Optional

from .constants import EPHEMERAL, InteractionResponseType

# Color constants
COLOR_INFO = 0x0066CC
COLOR_ERROR = 0xFF4C4C


def pong_response() -> dict:
    return {'type': InteractionResponseType.PONG}


def message_response(
    content: str = None,
    embeds: List[Dict[str, Any]] = None,
    ephemeral: bool = False
) -> dict:
    """Immediate channel message (type 4)."""
    data = {}
    if content:
        data['content'] = content
    if embeds:
        data['embeds'] = embeds
    if ephemeral:
        data['flags'] = EPHEMERAL

    return {
        'type': InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        'data': data
    }


def deferred_response(ephemeral: bool = False) -> dict:
    """Acknowledge now, edit the original message later (type 5).

    Discord shows a "thinking..." indicator; the follow-up must arrive within
    15 minutes.
    """
    response = {'type': InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE}
    if ephemeral:
        response['data'] = {'flags': EPHEMERAL}
    return response


def autocomplete_response(choices: List[Dict[str, Any]]) -> dict:
    """Autocomplete choices, Discord accepts at most 25."""
    return {
        'type': InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
        'data': {'choices': choices[:25]}
    }


def create_error_embed(title: str, description: str, footer: Optional[str] = None) -> dict:
    embed = {
        'title': title,
        'description': description,
        'color': COLOR_ERROR
    }
    if footer:
        embed['footer'] = {'text': footer}
    return embed


def get_error_response(error_type: str = 'internal', detail: str = None) -> tuple:
    """Ephemeral error message for the outer boundary.

    Discord only renders messages from 2xx responses, so errors are reported
    with status 200.

    Args:
        error_type: 'unsupported' or 'internal'
        detail: Optional text naming what was not handled

    Returns:
        Tuple of (response_dict, status_code)
    """
    if error_type == 'unsupported':
        description = 'This interaction is not supported by this application.'
        if detail:
            description = f'`{detail}` is not supported by this application.'
        embed = create_error_embed('Unsupported Interaction', description)
    else:
        embed = create_error_embed(
            'Internal Error',
            'An unexpected error occurred. The service is still running.',
            footer='Error logged - service continues running'
        )

    return message_response(embeds=[embed], ephemeral=True), 200
