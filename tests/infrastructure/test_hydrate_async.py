"""Async Hydration - load_graph_async / load_graphs_async over AsyncSession.run_sync.

Reading a relationship that was never loaded inside async code raises MissingGreenlet,
so plain attribute access after hydration proves the graph is resident.
"""

import pytest
from sqlalchemy import select, text

from graphload.core.errors import UnmappedTypeError
from graphload.db.session import create_async_session_factory
from graphload.services.hydrate import load_graph_async, load_graphs_async

from tests.models import Customer, NotMapped


async def test_load_graph_async_hydrates_graph(async_db):
    customer = await async_db.get(Customer, 1)

    result = await load_graph_async(async_db, customer)

    assert result is customer
    assert customer.address.city == "London"
    names = [line.product.name for o in customer.orders for line in o.lines]
    assert names == ["Widget", "Gadget", "Widget"]


async def test_load_graph_async_restores_autoflush(async_db):
    customer = await async_db.get(Customer, 1)
    await load_graph_async(async_db, customer)
    assert async_db.sync_session.autoflush is True


async def test_load_graphs_async_keeps_order_and_none(async_db):
    result = await async_db.execute(select(Customer).order_by(Customer.id))
    roots = list(result.scalars())
    roots.insert(1, None)

    hydrated = await load_graphs_async(async_db, roots)

    assert hydrated is roots
    assert roots[1] is None
    assert [c.name for c in (roots[0], roots[2])] == ["Ada", "Grace"]
    assert len(roots[0].orders) == 2
    assert roots[2].address is None


async def test_load_graph_async_propagates_unmapped_type(async_db):
    with pytest.raises(UnmappedTypeError):
        await load_graph_async(async_db, NotMapped(1))


async def test_async_session_factory_connects():
    factory = create_async_session_factory("sqlite+aiosqlite:///:memory:")
    async with factory() as session:
        assert (await session.execute(text("SELECT 1"))).scalar() == 1
    await session.bind.dispose()
