# tests/test_concurrency.py
import asyncio

from conftest import GatedService, make_product, quiet_settings, settle
from inventory.config import Settings
from inventory.service import MockProductService
from inventory.store import OperationKind, OperationStatus, ProductsState, ProductStore


def test_loading_flag_is_last_writer_wins():
    # Two overlapping operations share one flag: the first to settle clears it
    # even though the other is still in flight.
    async def run():
        service = GatedService()
        store = ProductStore(service, ProductsState(products=(make_product("1"), make_product("2"))))
        fetch = asyncio.create_task(store.fetch_all())
        delete = asyncio.create_task(store.delete_by_id("2"))
        await settle()
        both_pending = store.state.loading

        service.release("delete_by_id")
        await delete
        after_delete = store.state.loading
        fetch_status = store.status(OperationKind.FETCH_ALL)

        service.release("list_all", result=[make_product("1"), make_product("2")])
        await fetch
        return both_pending, after_delete, fetch_status, store

    both_pending, after_delete, fetch_status, store = asyncio.run(run())
    assert both_pending is True
    assert after_delete is False
    assert fetch_status == OperationStatus.PENDING
    assert store.state.loading is False


def test_late_resolution_overwrites_newer_state():
    # No stale-response guard: the fetch issued first but settled last wins.
    async def run():
        service = GatedService()
        store = ProductStore(service)
        first = asyncio.create_task(store.fetch_all())
        await settle()
        second = asyncio.create_task(store.fetch_all())
        await settle()
        service.release("list_all", result=[make_product("new")], newest=True)
        await second
        newest = [p.id for p in store.state.products]
        service.release("list_all", result=[make_product("old")])
        await first
        return newest, store

    newest, store = asyncio.run(run())
    assert newest == ["new"]
    assert [p.id for p in store.state.products] == ["old"]


def test_out_of_order_settlement():
    async def run():
        service = GatedService()
        store = ProductStore(service)
        first = asyncio.create_task(store.fetch_all())
        second = asyncio.create_task(store.fetch_by_id("1"))
        await settle()
        service.release("get_by_id", result=make_product("1"))
        await second
        service.release("list_all", error=RuntimeError("Network error: Failed to fetch products"))
        await first
        return store

    store = asyncio.run(run())
    # the fetch failure arrives last and its error stands
    assert store.state.error == "Network error: Failed to fetch products"
    assert store.state.selected_product.id == "1"
    assert store.state.loading is False


def test_concurrent_creates_against_mock_service(product_data):
    service = MockProductService(settings=quiet_settings())
    store = ProductStore(service)

    async def run():
        await store.fetch_all()
        actions = await asyncio.gather(*[
            store.create(product_data.model_copy(update={"name": f"Item {i}"}))
            for i in range(20)
        ])
        return actions

    actions = asyncio.run(run())
    assert all(a.ok for a in actions)
    ids = [p.id for p in store.state.products]
    assert len(ids) == 25
    assert len(set(ids)) == 25
    assert store.state.loading is False


def test_fetch_and_delete_with_real_delays():
    # get < delete < list, so the delete lands on the backend before the list reads it
    settings = Settings(latency_scale=0.01, network_error_rate=0, server_error_rate=0)
    store = ProductStore(MockProductService(settings=settings))

    async def run():
        return await asyncio.gather(store.fetch_all(), store.delete_by_id("2"))

    fetched, deleted = asyncio.run(run())
    assert fetched.ok and deleted.ok
    assert [p.id for p in store.state.products] == ["1", "3", "4", "5"]
