"""One-time registration of the example commands with Discord.

Usage:
    DISCORD_BOT_TOKEN=... DISCORD_APPLICATION_ID=... python -m example_app.register_commands
"""
import sys

from .bot import AppContext, build_router
from .config import Config
from .discord_service import DiscordService


def main() -> int:
    if not Config.DISCORD_BOT_TOKEN or not Config.DISCORD_APPLICATION_ID:
        print("DISCORD_BOT_TOKEN and DISCORD_APPLICATION_ID must be configured", file=sys.stderr)
        return 1

    router = build_router(AppContext.from_config())
    results = DiscordService.register_all_commands(router, Config.DISCORD_GUILD_IDS)

    exit_code = 0
    for result in results:
        if result['status'] == 'success':
            print(f"{result['scope']}: {result['message']}")
        else:
            print(f"Warning: failed to register {result['scope']} commands: {result['message']}")
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
