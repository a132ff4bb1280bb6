"""Service for Discord REST API calls."""
from typing import Dict, List, Optional

import requests

from interaction_router.observability import get_logger

from .config import Config

logger = get_logger('example-app-discord-service')


class DiscordService:
    """Service for Discord REST API calls."""

    @staticmethod
    def _headers(bot_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {bot_token}",
            "Content-Type": "application/json"
        }

    @staticmethod
    def bulk_overwrite_commands(commands: List[dict], guild_id: Optional[str] = None) -> dict:
        """Replace every command of one scope (global or a guild) with `commands`."""
        scope = f"guild {guild_id}" if guild_id else "global"
        if not Config.DISCORD_BOT_TOKEN or not Config.DISCORD_APPLICATION_ID:
            return {'status': 'error', 'scope': scope, 'message': 'Discord tokens not configured'}

        url = f"{Config.DISCORD_API_BASE_URL}/applications/{Config.DISCORD_APPLICATION_ID}"
        if guild_id:
            url += f"/guilds/{guild_id}"
        url += "/commands"

        try:
            response = requests.put(
                url,
                headers=DiscordService._headers(Config.DISCORD_BOT_TOKEN),
                json=commands,
                timeout=Config.REQUEST_TIMEOUT_SECONDS
            )
        except requests.RequestException as e:
            logger.error("Command registration request failed", error=e, scope=scope)
            return {'status': 'error', 'scope': scope, 'message': str(e)}

        if response.status_code in [200, 201]:
            logger.info("Commands registered", scope=scope, count=len(commands))
            return {
                'status': 'success',
                'scope': scope,
                'message': f"{len(commands)} command(s) registered"
            }

        logger.warning(
            "Command registration rejected",
            scope=scope,
            status_code=response.status_code,
            response_text=response.text[:200]
        )
        return {
            'status': 'error',
            'scope': scope,
            'message': f"Error: {response.status_code}",
            'details': response.text
        }

    @staticmethod
    def register_all_commands(router, guild_ids: Optional[List[str]] = None) -> List[dict]:
        """Publish the global commands, then the commands of every guild.

        Guilds listed in `guild_ids` without any guild-specific command get an
        empty list, which clears commands left over from earlier deployments.
        """
        results = [DiscordService.bulk_overwrite_commands(router.get_global_commands())]

        guild_commands = router.get_all_guild_commands()
        for guild_id in guild_ids or []:
            guild_commands.setdefault(guild_id, [])

        for guild_id, commands in guild_commands.items():
            results.append(DiscordService.bulk_overwrite_commands(commands, guild_id=guild_id))

        return results

    @staticmethod
    def edit_original_response(application_id: str, interaction_token: str, payload: dict,
                               bot_token: str) -> bool:
        """Replace the placeholder of a deferred response."""
        url = f"{Config.DISCORD_API_BASE_URL}/webhooks/{application_id}/{interaction_token}/messages/@original"

        try:
            response = requests.patch(
                url,
                headers=DiscordService._headers(bot_token),
                json=payload,
                timeout=Config.REQUEST_TIMEOUT_SECONDS
            )
        except requests.RequestException as e:
            logger.error("Follow-up request failed", error=e, application_id=application_id)
            return False

        if response.status_code in [200, 204]:
            return True

        logger.error(
            "Error editing original response",
            status_code=response.status_code,
            response_text=response.text[:200],
            application_id=application_id
        )
        return False
