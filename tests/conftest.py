# tests/conftest.py
import asyncio
from typing import Any, Dict, List, Optional

import pytest

from inventory.config import Settings
from inventory.core import CreateProductData, Product, UpdateProductData, new_product
from inventory.service import MockProductService


def quiet_settings(**overrides) -> Settings:
    """No latency and no random failures unless asked for."""
    values = dict(latency_scale=0, network_error_rate=0, server_error_rate=0, random_seed=1)
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return quiet_settings()


@pytest.fixture
def service(settings):
    return MockProductService(settings=settings)


@pytest.fixture
def product_data():
    return CreateProductData(
        name="Test Product",
        description="Test Description",
        price=99.99,
        category="Test",
        in_stock=True,
    )


class GatedService:
    """Test double whose calls block until the test releases them.

    `release(op, result=..., error=...)` settles the oldest pending call of
    that operation, or the newest with newest=True. Calls record their
    arguments in `calls`.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self._gates: Dict[str, List[asyncio.Future]] = {}

    def _gate(self, op: str) -> asyncio.Future:
        fut = asyncio.get_running_loop().create_future()
        self._gates.setdefault(op, []).append(fut)
        return fut

    def release(self, op: str, result: Any = None, error: Optional[BaseException] = None,
                newest: bool = False) -> None:
        waiting = [f for f in self._gates[op] if not f.done()]
        fut = waiting[-1] if newest else waiting[0]
        if error is not None:
            fut.set_exception(error)
        else:
            fut.set_result(result)

    async def list_all(self):
        self.calls.append(("list_all",))
        return await self._gate("list_all")

    async def get_by_id(self, product_id):
        self.calls.append(("get_by_id", product_id))
        return await self._gate("get_by_id")

    async def create(self, data: CreateProductData):
        self.calls.append(("create", data))
        return await self._gate("create")

    async def update(self, data: UpdateProductData):
        self.calls.append(("update", data))
        return await self._gate("update")

    async def delete_by_id(self, product_id):
        self.calls.append(("delete_by_id", product_id))
        return await self._gate("delete_by_id")


async def settle(times: int = 3):
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(times):
        await asyncio.sleep(0)


def make_product(product_id: str, **fields) -> Product:
    base = dict(name=f"Product {product_id}", description="", price=1.0, category="Misc", in_stock=True)
    base.update(fields)
    return new_product(product_id, CreateProductData(**base))
