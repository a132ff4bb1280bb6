"""Application configuration."""
import os


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name, '').strip()
    if not value:
        return default
    return int(value)


class Config:
    """Application configuration."""
    # Discord configuration
    DISCORD_PUBLIC_KEY = os.environ.get('DISCORD_PUBLIC_KEY')
    DISCORD_BOT_TOKEN = os.environ.get('DISCORD_BOT_TOKEN')
    DISCORD_APPLICATION_ID = os.environ.get('DISCORD_APPLICATION_ID')
    DISCORD_API_BASE_URL = os.environ.get('DISCORD_API_BASE_URL', "https://discord.com/api/v10").rstrip('/')
    DISCORD_GUILD_IDS = [
        guild.strip() for guild in os.environ.get('DISCORD_GUILD_IDS', '').split(',') if guild.strip()
    ]

    # Replay window for signed requests, 0 disables the check
    SIGNATURE_MAX_AGE_SECONDS = _int_env('SIGNATURE_MAX_AGE_SECONDS', 0)

    # Example application
    APP_NAME = os.environ.get('APP_NAME', 'Example Bot')
    THINK_DELAY_SECONDS = _int_env('THINK_DELAY_SECONDS', 5)

    REQUEST_TIMEOUT_SECONDS = 10
