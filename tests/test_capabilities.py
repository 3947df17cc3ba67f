import logging

import pytest

from curiosity.runtime.capabilities import CapabilityKind, CapabilityRegistry, action, query


def noop(args):
    return "result"


def test_register_and_lookup():
    registry = CapabilityRegistry()
    clock = query("clock", "Tells the time.", noop)

    assert registry.register(clock) is True
    assert registry.lookup("clock") is clock
    assert registry.lookup("missing") is None
    assert "clock" in registry
    assert len(registry) == 1


def test_duplicate_registration_keeps_first_and_warns(caplog):
    first = query("clock", "First.", noop)
    second = action("clock", "Second.", noop)
    registry = CapabilityRegistry([first])

    with caplog.at_level(logging.WARNING, logger="curiosity.capabilities"):
        assert registry.register(second) is False

    assert registry.lookup("clock") is first
    assert len(registry) == 1
    assert 'A tool with the name "clock" is already registered.' in caplog.text


def test_list_keeps_registration_order():
    registry = CapabilityRegistry([query(name, name, noop) for name in ("b", "a", "c")])
    assert [c.name for c in registry.list()] == ["b", "a", "c"]
    assert registry.names() == ["b", "a", "c"]


def test_factories_set_kind():
    assert action("x", "x", noop).kind == CapabilityKind.ACTION
    assert query("x", "x", noop).kind == CapabilityKind.QUERY


@pytest.mark.asyncio
async def test_action_result_is_dropped():
    assert await action("x", "x", noop).execute({}) is None


@pytest.mark.asyncio
async def test_query_returns_sync_and_async_results():
    async def fetch(args):
        return args["n"] * 2

    assert await query("x", "x", noop).execute({}) == "result"
    assert await query("y", "y", fetch).execute({"n": 21}) == 42


@pytest.mark.asyncio
async def test_executor_errors_propagate():
    def broken(args):
        raise KeyError("n")

    with pytest.raises(KeyError):
        await query("x", "x", broken).execute({})
