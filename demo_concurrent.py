import asyncio

from inventory.config import settings
from inventory.store import ProductStore
from sdk.pyinventory import connect


def trace(state, action):
    print(f"  {action.type:<40} loading={state.loading!s:<5} "
          f"products={len(state.products)} error={state.error}")


async def main():
    store = ProductStore(connect(settings))
    store.subscribe(trace)

    # Delete (600ms) settles before the list (800ms): its loading=False lands
    # while the fetch is still in flight, and the fetch then overwrites the
    # list with whatever the backend returned.
    print("\n⚡ fetch_all + delete_by_id('2') issued back-to-back")
    fetched, deleted = await asyncio.gather(
        store.fetch_all(),
        store.delete_by_id("2"),
    )

    print(f"\n📦 fetch: {fetched.status.value}, delete: {deleted.status.value}")
    print("📦 Final ids:", [p.id for p in store.state.products])
    print("⏳ Loading:", store.state.loading)


if __name__ == "__main__":
    asyncio.run(main())
