"""Tests for DiscordService REST calls."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from example_app.discord_service import DiscordService
from interaction_router import InteractionRouter
from example_app.config import Config


@pytest.fixture(autouse=True)
def discord_config(monkeypatch):
    monkeypatch.setattr(Config, "DISCORD_BOT_TOKEN", "bot-token")
    monkeypatch.setattr(Config, "DISCORD_APPLICATION_ID", "app-1")
    monkeypatch.setattr(Config, "DISCORD_API_BASE_URL", "https://discord.test/api/v10")


def ok(status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = "[]"
    return response


async def noop(ctx, interaction):
    return None


class TestBulkOverwrite:
    def test_global_scope(self):
        with patch("example_app.discord_service.requests.put", return_value=ok()) as put:
            result = DiscordService.bulk_overwrite_commands([{"name": "hello"}])

        assert result["status"] == "success"
        args, kwargs = put.call_args
        assert args[0] == "https://discord.test/api/v10/applications/app-1/commands"
        assert kwargs["json"] == [{"name": "hello"}]
        assert kwargs["headers"]["Authorization"] == "Bot bot-token"
        assert kwargs["timeout"] == Config.REQUEST_TIMEOUT_SECONDS

    def test_guild_scope(self):
        with patch("example_app.discord_service.requests.put", return_value=ok()) as put:
            result = DiscordService.bulk_overwrite_commands([], guild_id="G")

        assert result["scope"] == "guild G"
        assert put.call_args[0][0] == "https://discord.test/api/v10/applications/app-1/guilds/G/commands"

    def test_rejected_by_discord(self):
        with patch("example_app.discord_service.requests.put", return_value=ok(400)):
            result = DiscordService.bulk_overwrite_commands([])

        assert result["status"] == "error"
        assert result["message"] == "Error: 400"

    def test_network_error(self):
        error = requests.ConnectionError("unreachable")
        with patch("example_app.discord_service.requests.put", side_effect=error):
            result = DiscordService.bulk_overwrite_commands([])

        assert result == {"status": "error", "scope": "global", "message": "unreachable"}

    def test_not_configured(self, monkeypatch):
        monkeypatch.setattr(Config, "DISCORD_BOT_TOKEN", None)
        with patch("example_app.discord_service.requests.put") as put:
            result = DiscordService.bulk_overwrite_commands([])

        assert result["status"] == "error"
        put.assert_not_called()


def test_register_all_commands_puts_each_scope():
    router = InteractionRouter(None)
    router.register_command(noop, {"name": "hello", "description": "hi"})
    router.register_command(noop, {"name": "local", "description": "guild"}, guilds=["G"])

    with patch("example_app.discord_service.requests.put", return_value=ok()) as put:
        results = DiscordService.register_all_commands(router, guild_ids=["G", "STALE"])

    assert [r["scope"] for r in results] == ["global", "guild G", "guild STALE"]
    urls_and_bodies = [(c.args[0].rsplit("/api/v10", 1)[1], c.kwargs["json"]) for c in put.call_args_list]
    assert urls_and_bodies == [
        ("/applications/app-1/commands", router.get_global_commands()),
        ("/applications/app-1/guilds/G/commands", [{"name": "local", "description": "guild"}]),
        ("/applications/app-1/guilds/STALE/commands", []),
    ]


class TestEditOriginalResponse:
    def test_patches_original_message(self):
        with patch("example_app.discord_service.requests.patch", return_value=ok()) as patch_call:
            sent = DiscordService.edit_original_response("app-1", "tok", {"content": "42"}, "bot-token")

        assert sent is True
        args, kwargs = patch_call.call_args
        assert args[0] == "https://discord.test/api/v10/webhooks/app-1/tok/messages/@original"
        assert kwargs["json"] == {"content": "42"}

    def test_failure_status(self):
        with patch("example_app.discord_service.requests.patch", return_value=ok(404)):
            assert DiscordService.edit_original_response("app-1", "tok", {}, "bot-token") is False

    def test_network_error(self):
        with patch("example_app.discord_service.requests.patch", side_effect=requests.Timeout("slow")):
            assert DiscordService.edit_original_response("app-1", "tok", {}, "bot-token") is False
