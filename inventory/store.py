# inventory/store.py
"""Client-side product store.

Holds the canonical product list, the selected product, a loading flag and
the last error. Every async operation goes through `_dispatch`, which applies
the pending -> fulfilled | rejected lifecycle and notifies subscribers after
each transition. State snapshots are immutable and swapped whole, so a
subscriber never sees a half-applied transition.

`loading` is one shared boolean: overlapping operations overwrite each other's
flag and the last one to settle wins. Resolutions are never discarded either,
so a slow response can overwrite a newer one.
"""
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .core import CreateProductData, InventorySummary, Product, UpdateProductData, summarize
from .service import ProductService

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    FETCH_ALL = "fetchProducts"
    FETCH_BY_ID = "fetchProductById"
    CREATE = "createProduct"
    UPDATE = "updateProduct"
    DELETE = "deleteProduct"
    CLEAR_ERROR = "clearError"
    CLEAR_SELECTED = "clearSelectedProduct"


class OperationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


FALLBACK_MESSAGES: Dict[OperationKind, str] = {
    OperationKind.FETCH_ALL: "Failed to fetch products",
    OperationKind.FETCH_BY_ID: "Failed to fetch product",
    OperationKind.CREATE: "Failed to create product",
    OperationKind.UPDATE: "Failed to update product",
    OperationKind.DELETE: "Failed to delete product",
}


class ProductsState(BaseModel):
    model_config = ConfigDict(frozen=True)

    products: Tuple[Product, ...] = ()
    selected_product: Optional[Product] = None
    loading: bool = False
    error: Optional[str] = None


class StoreAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    status: OperationStatus
    payload: Any = None
    error: Optional[str] = None

    @property
    def type(self) -> str:
        if self.kind in FALLBACK_MESSAGES:
            return f"products/{self.kind.value}/{self.status.value}"
        return f"products/{self.kind.value}"

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.FULFILLED


Listener = Callable[[ProductsState, StoreAction], None]


class ProductStore:
    def __init__(self, service: ProductService, state: Optional[ProductsState] = None):
        self._service = service
        self._state = state or ProductsState()
        self._listeners: List[Listener] = []
        self._statuses: Dict[OperationKind, OperationStatus] = {}

    @property
    def state(self) -> ProductsState:
        return self._state

    def status(self, kind: OperationKind) -> OperationStatus:
        return self._statuses.get(kind, OperationStatus.IDLE)

    def summary(self) -> InventorySummary:
        return summarize(self._state.products)

    # ---------------------------
    # Subscriptions
    # ---------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener(state, action)`; returns a function that removes it."""
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, action: StoreAction) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state, action)
            except Exception:
                name = getattr(listener, "__name__", repr(listener))
                logger.exception("store listener %s failed on %s", name, action.type)

    def _commit(self, action: StoreAction, **changes: Any) -> StoreAction:
        self._state = self._state.model_copy(update=changes)
        self._statuses[action.kind] = action.status
        logger.debug("%s", action.type)
        self._notify(action)
        return action

    # ---------------------------
    # Lifecycle
    # ---------------------------
    async def _dispatch(
        self,
        kind: OperationKind,
        call: Callable[[], Awaitable[Any]],
        reduce: Callable[[ProductsState, Any], Dict[str, Any]],
    ) -> StoreAction:
        self._commit(StoreAction(kind=kind, status=OperationStatus.PENDING), loading=True, error=None)
        try:
            payload = await call()
        except Exception as exc:
            message = str(exc) or FALLBACK_MESSAGES[kind]
            logger.warning("%s rejected: %s", kind.value, message)
            action = StoreAction(kind=kind, status=OperationStatus.REJECTED, error=message)
            return self._commit(action, loading=False, error=message)

        changes = reduce(self._state, payload)
        action = StoreAction(kind=kind, status=OperationStatus.FULFILLED, payload=payload)
        return self._commit(action, loading=False, **changes)

    # ---------------------------
    # Operations
    # ---------------------------
    async def fetch_all(self) -> StoreAction:
        return await self._dispatch(OperationKind.FETCH_ALL, self._service.list_all, _replace_products)

    async def fetch_by_id(self, product_id: str) -> StoreAction:
        return await self._dispatch(
            OperationKind.FETCH_BY_ID,
            lambda: self._service.get_by_id(product_id),
            _select_product,
        )

    async def create(self, data: CreateProductData) -> StoreAction:
        data = data.model_copy()
        return await self._dispatch(
            OperationKind.CREATE,
            lambda: self._service.create(data),
            _append_product,
        )

    async def update(self, data: UpdateProductData) -> StoreAction:
        data = data.model_copy()
        return await self._dispatch(
            OperationKind.UPDATE,
            lambda: self._service.update(data),
            _replace_product,
        )

    async def delete_by_id(self, product_id: str) -> StoreAction:
        async def call() -> str:
            await self._service.delete_by_id(product_id)
            return product_id

        return await self._dispatch(OperationKind.DELETE, call, _remove_product)

    def clear_error(self) -> StoreAction:
        action = StoreAction(kind=OperationKind.CLEAR_ERROR, status=OperationStatus.FULFILLED)
        return self._commit(action, error=None)

    def clear_selected(self) -> StoreAction:
        action = StoreAction(kind=OperationKind.CLEAR_SELECTED, status=OperationStatus.FULFILLED)
        return self._commit(action, selected_product=None)


# ---------------------------
# Fulfilled reducers: (state, payload) -> changed fields
# ---------------------------
def _replace_products(state: ProductsState, products: List[Product]) -> Dict[str, Any]:
    return {"products": tuple(products)}


def _select_product(state: ProductsState, product: Product) -> Dict[str, Any]:
    return {"selected_product": product}


def _append_product(state: ProductsState, product: Product) -> Dict[str, Any]:
    products = list(state.products)
    for i, p in enumerate(products):
        if p.id == product.id:
            logger.warning("created product %s already listed; replacing in place", product.id)
            products[i] = product
            break
    else:
        products.append(product)
    return {"products": tuple(products)}


def _replace_product(state: ProductsState, product: Product) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    # An id missing from the list is not inserted; the selection check is separate.
    products = list(state.products)
    for i, p in enumerate(products):
        if p.id == product.id:
            products[i] = product
            changes["products"] = tuple(products)
            break
    if state.selected_product is not None and state.selected_product.id == product.id:
        changes["selected_product"] = product
    return changes


def _remove_product(state: ProductsState, product_id: str) -> Dict[str, Any]:
    changes: Dict[str, Any] = {
        "products": tuple(p for p in state.products if p.id != product_id),
    }
    if state.selected_product is not None and state.selected_product.id == product_id:
        changes["selected_product"] = None
    return changes
