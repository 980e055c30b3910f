import asyncio
import logging
import random
import uuid
from typing import Iterable, List, Optional, Protocol

from .config import Settings, settings as default_settings
from .core import CreateProductData, Product, UpdateProductData, apply_patch, new_product, utc_now
from .database import SEED_PRODUCTS
from .errors import NetworkError, ProductNotFoundError, ProductValidationError, ServerError

logger = logging.getLogger(__name__)


class ProductService(Protocol):
    """What the store needs from a product backend."""

    async def list_all(self) -> List[Product]: ...

    async def get_by_id(self, product_id: str) -> Product: ...

    async def create(self, data: CreateProductData) -> Product: ...

    async def update(self, data: UpdateProductData) -> Product: ...

    async def delete_by_id(self, product_id: str) -> None: ...


class MockProductService:
    """In-memory product backend with simulated latency and random failures.

    Each instance owns its own catalog; two services never share records.
    Every call sleeps for the configured per-operation delay before it touches
    the catalog, so the mutation itself runs without yielding.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        seed_products: Optional[Iterable[Product]] = None,
    ):
        self.settings = settings or default_settings
        self._rng = rng or random.Random(self.settings.random_seed)
        self._seed = list(SEED_PRODUCTS if seed_products is None else seed_products)
        self._products: List[Product] = list(self._seed)

    def reset(self) -> None:
        self._products = list(self._seed)

    async def _delay(self, operation: str) -> None:
        await asyncio.sleep(self.settings.delay_seconds(operation))

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise ProductNotFoundError(f"Product with id {product_id} not found")

    def _roll(self, rate: float) -> bool:
        return self._rng.random() < rate

    async def list_all(self) -> List[Product]:
        logger.debug("list_all")
        await self._delay("list")
        if self._roll(self.settings.network_error_rate):
            logger.warning("injected network failure on list_all")
            raise NetworkError("Network error: Failed to fetch products")
        return list(self._products)

    async def get_by_id(self, product_id: str) -> Product:
        logger.debug("get_by_id %s", product_id)
        await self._delay("get")
        return self._products[self._index_of(product_id)]

    async def create(self, data: CreateProductData) -> Product:
        logger.debug("create %r", data.name)
        await self._delay("create")
        if not data.name.strip():
            raise ProductValidationError("Product name is required")
        if self._roll(self.settings.server_error_rate):
            logger.warning("injected server failure on create")
            raise ServerError("Server error: Failed to create product")

        product = new_product(uuid.uuid4().hex, data)
        self._products.append(product)
        logger.info("created product %s (%s)", product.id, product.name)
        return product

    async def update(self, data: UpdateProductData) -> Product:
        logger.debug("update %s", data.id)
        await self._delay("update")
        index = self._index_of(data.id)
        if self._roll(self.settings.server_error_rate):
            logger.warning("injected server failure on update of %s", data.id)
            raise ServerError("Server error: Failed to update product")

        updated = apply_patch(self._products[index], data, utc_now())
        self._products[index] = updated
        logger.info("updated product %s", updated.id)
        return updated

    async def delete_by_id(self, product_id: str) -> None:
        logger.debug("delete_by_id %s", product_id)
        await self._delay("delete")
        index = self._index_of(product_id)
        if self._roll(self.settings.server_error_rate):
            logger.warning("injected server failure on delete of %s", product_id)
            raise ServerError("Server error: Failed to delete product")

        del self._products[index]
        logger.info("deleted product %s", product_id)
