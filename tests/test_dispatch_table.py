"""Tests for DispatchTable."""
import pytest

from interaction_router.dispatch_table import DispatchTable, Found, NotFound
from interaction_router.errors import DuplicateKeyError, RegistryFrozenError


async def noop(ctx, interaction):
    return None


def test_lookup_registered_handler():
    table = DispatchTable()
    table.register("ping", noop)

    assert table.lookup("ping") == Found(noop)
    assert "ping" in table
    assert len(table) == 1


def test_lookup_missing_returns_not_found():
    table = DispatchTable()
    assert table.lookup("ping") == NotFound("ping")


def test_keys_are_case_sensitive():
    table = DispatchTable()
    table.register("ping", noop)

    assert isinstance(table.lookup("Ping"), NotFound)
    table.register("Ping", noop)
    assert table.keys() == ["ping", "Ping"]


def test_duplicate_registration_fails():
    table = DispatchTable('components')
    table.register("ping", noop)

    with pytest.raises(DuplicateKeyError) as exc_info:
        table.register("ping", noop)
    assert exc_info.value.key == "ping"
    assert exc_info.value.scope == "components"


def test_empty_key_rejected():
    table = DispatchTable()
    with pytest.raises(ValueError):
        table.register("", noop)


def test_frozen_table_rejects_registration():
    table = DispatchTable()
    table.freeze()

    assert table.frozen
    with pytest.raises(RegistryFrozenError):
        table.register("ping", noop)


@pytest.mark.asyncio
async def test_invoke_passes_arguments(recorder):
    handler = recorder(result={"type": 4})
    table = DispatchTable()
    table.register("ping", handler)

    result = await table.invoke("ping", "ctx", {"id": "1"}, "rest")

    assert result == Found({"type": 4})
    assert handler.calls == [("ctx", {"id": "1"}, ("rest",))]


@pytest.mark.asyncio
async def test_invoke_missing_calls_nothing(recorder):
    handler = recorder()
    table = DispatchTable()
    table.register("ping", handler)

    result = await table.invoke("pong", "ctx", {})

    assert result == NotFound("pong")
    assert handler.calls == []


@pytest.mark.asyncio
async def test_handler_returning_none_is_found():
    table = DispatchTable()
    table.register("ping", noop)

    assert await table.invoke("ping", None, {}) == Found(None)
