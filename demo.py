#!/usr/bin/env python
import asyncio

from inventory.config import settings
from inventory.core import CreateProductData, UpdateProductData
from inventory.store import ProductStore
from sdk.pyinventory import connect


def report(action):
    if action.ok:
        print(f"  ok: {action.type}")
    else:
        print(f"  failed: {action.type} -> {action.error}")


async def main():
    store = ProductStore(connect(settings))

    # -----------------------------
    # Load catalog
    # -----------------------------
    print("Fetching products...")
    report(await store.fetch_all())
    for p in store.state.products:
        print(f"  {p.id:>4}  {p.name:<24} {p.price:>9.2f}  {p.category}")

    # -----------------------------
    # Create
    # -----------------------------
    print("\nCreating a product...")
    action = await store.create(CreateProductData(
        name="Mechanical Keyboard",
        description="Tenkeyless keyboard with brown switches",
        price=149.0,
        category="Electronics",
        in_stock=True,
    ))
    report(action)
    new_id = action.payload.id if action.ok else None

    print("\nCreating a product without a name...")
    report(await store.create(CreateProductData(
        name="  ", description="", price=1.0, category="Books", in_stock=False,
    )))

    # -----------------------------
    # Select + update
    # -----------------------------
    print("\nViewing product 1...")
    report(await store.fetch_by_id("1"))
    print(f"  selected: {store.state.selected_product}")

    print("\nDiscounting product 1...")
    report(await store.update(UpdateProductData(id="1", price=1199.99)))
    print(f"  selected now: {store.state.selected_product.price if store.state.selected_product else None}")

    # -----------------------------
    # Delete
    # -----------------------------
    if new_id:
        print(f"\nDeleting {new_id}...")
        report(await store.delete_by_id(new_id))

    print("\nMissing product...")
    report(await store.fetch_by_id("999"))

    # -----------------------------
    # Summary
    # -----------------------------
    print("\nSummary:", store.summary())
    print("Final error:", store.state.error)


if __name__ == "__main__":
    asyncio.run(main())
