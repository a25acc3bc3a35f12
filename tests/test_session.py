import asyncio

import pytest

from graphql_type_graph.config import DisplayOptions
from graphql_type_graph.errors import SchemaParseError
from graphql_type_graph.session import GraphSession

FIRST = [("first.graphql", "type Query { first: Int }")]
SECOND = [("second.graphql", "type Query { second: Int }")]


def provider(sources, gate=None, error=None):
    async def fetch():
        if gate is not None:
            await gate.wait()
        if error is not None:
            raise error
        return sources

    return fetch


def query_fields(session):
    return list(session.graph.query_type.target.fields)


def test_load_makes_graph_current():
    session = GraphSession()
    graph = asyncio.run(session.load(provider(FIRST)))
    assert graph is session.graph
    assert query_fields(session) == ["first"]
    assert not session.loading


def test_superseded_load_is_discarded():
    async def scenario():
        session = GraphSession()
        slow_gate = asyncio.Event()
        slow = asyncio.create_task(session.load(provider(FIRST, gate=slow_gate)))
        await asyncio.sleep(0)
        fast = await session.load(provider(SECOND))
        slow_gate.set()
        return session, await slow, fast

    session, slow_result, fast_result = asyncio.run(scenario())
    assert slow_result is None
    assert fast_result is session.graph
    assert query_fields(session) == ["second"]


def test_superseded_failure_is_ignored():
    async def scenario():
        session = GraphSession()
        gate = asyncio.Event()
        failing = asyncio.create_task(session.load(provider(FIRST, gate=gate, error=RuntimeError("boom"))))
        await asyncio.sleep(0)
        await session.load(provider(SECOND))
        gate.set()
        return session, await failing

    session, result = asyncio.run(scenario())
    assert result is None
    assert query_fields(session) == ["second"]


def test_update_supersedes_pending_load():
    async def scenario():
        session = GraphSession()
        gate = asyncio.Event()
        pending = asyncio.create_task(session.load(provider(FIRST, gate=gate)))
        await asyncio.sleep(0)
        session.update(SECOND)
        assert not session.loading
        gate.set()
        return session, await pending

    session, result = asyncio.run(scenario())
    assert result is None
    assert query_fields(session) == ["second"]


def test_set_options_keeps_pending_load(relay_sdl):
    async def scenario():
        session = GraphSession(DisplayOptions(skip_relay=True))
        session.update(FIRST)
        gate = asyncio.Event()
        pending = asyncio.create_task(session.load(provider([("s.graphql", relay_sdl)], gate=gate)))
        await asyncio.sleep(0)
        session.set_options(DisplayOptions(skip_relay=False))
        assert session.loading
        gate.set()
        return session, await pending

    session, result = asyncio.run(scenario())
    assert result is session.graph
    assert "node" in query_fields(session)


def test_previous_graph_is_retained_while_loading_and_on_failure():
    async def scenario():
        session = GraphSession()
        await session.load(provider(FIRST))
        before = session.graph
        gate = asyncio.Event()
        pending = asyncio.create_task(session.load(provider([("bad.graphql", "type Query {")], gate=gate)))
        await asyncio.sleep(0)
        assert session.loading
        assert session.graph is before
        gate.set()
        with pytest.raises(SchemaParseError):
            await pending
        return session, before

    session, before = asyncio.run(scenario())
    assert session.graph is before
    assert not session.loading


def test_provider_failure_propagates():
    session = GraphSession()
    with pytest.raises(RuntimeError):
        asyncio.run(session.load(provider(FIRST, error=RuntimeError("offline"))))
    assert session.graph is None


def test_set_options_rebuilds_from_retained_sources(relay_sdl):
    session = GraphSession(DisplayOptions(skip_relay=True))
    session.update([("s.graphql", relay_sdl)])
    assert "node" not in query_fields(session)
    session.set_options(DisplayOptions(skip_relay=False))
    assert "node" in query_fields(session)


def test_view_uses_session_options(relay_sdl):
    session = GraphSession(DisplayOptions(root_type="Item", hide_root=True))
    assert session.view() is None
    session.update([("s.graphql", relay_sdl)])
    view = session.view()
    assert view.root_id == "TYPE::Item"
    assert view.nodes == {}
