"""Tests for the example commands."""
import pytest

from example_app import command_handlers
from example_app.bot import AppContext, build_router
from example_app.command_handlers import THINK_ANSWER, handle_hello, handle_think
from interaction_router.background import ExecutionContext


@pytest.fixture
def ctx():
    context = AppContext(
        app_name="Test Bot",
        application_id="app-1",
        discord_token="bot-token",
        think_delay=0,
        execution=ExecutionContext(max_workers=1)
    )
    yield context
    context.execution.shutdown()


def hello(options=None, command_type=1):
    data = {"name": "hello", "type": command_type}
    if options is not None:
        data["options"] = options
    return {"type": 2, "id": "42", "token": "interaction-token", "data": data}


class TestHello:
    @pytest.mark.asyncio
    async def test_plain_greeting(self, ctx):
        response = await handle_hello(ctx, hello())

        assert response == {"type": 4, "data": {"content": "Hello from Test Bot!"}}

    @pytest.mark.asyncio
    async def test_greets_user(self, ctx):
        response = await handle_hello(ctx, hello([{"name": "name", "type": 6, "value": "1234"}]))

        assert response["data"]["content"] == "Hello from Test Bot, <@1234>!"

    @pytest.mark.asyncio
    async def test_wrong_option_type(self, ctx):
        response = await handle_hello(ctx, hello([{"name": "name", "type": 3, "value": "bob"}]))

        assert response["data"]["flags"] == 64
        assert response["data"]["embeds"][0]["title"] == "Unexpected Option Type"

    @pytest.mark.asyncio
    async def test_rejects_non_slash_invocation(self, ctx):
        response = await handle_hello(ctx, hello(command_type=3))

        assert response["data"]["embeds"][0]["title"] == "Unexpected Command Type"


class TestThink:
    @pytest.mark.asyncio
    async def test_defers_then_edits_original(self, ctx, monkeypatch):
        calls = []

        def fake_edit(application_id, token, payload, bot_token):
            calls.append((application_id, token, payload, bot_token))
            return True

        monkeypatch.setattr(command_handlers.DiscordService, "edit_original_response", fake_edit)

        response = await handle_think(ctx, hello())

        assert response == {"type": 5, "data": {"flags": 64}}
        assert ctx.execution.join(timeout=5)
        assert calls == [("app-1", "interaction-token", {"content": THINK_ANSWER}, "bot-token")]


@pytest.mark.asyncio
async def test_router_wires_example_commands(ctx):
    router = build_router(ctx)

    assert [c["name"] for c in router.get_global_commands()] == ["help", "hello", "think"]
    response = await router.handle(hello())
    assert response["data"]["content"] == "Hello from Test Bot!"
