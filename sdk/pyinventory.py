# sdk/pyinventory.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from inventory.config import Settings, settings as default_settings
from inventory.core import CreateProductData, Product, UpdateProductData
from inventory.errors import (
    NetworkError, ProductNotFoundError, ProductServiceError,
    ProductValidationError, ServerError,
)
from inventory.service import MockProductService, ProductService

logger = logging.getLogger(__name__)

_ERRORS_BY_STATUS = {
    400: ProductValidationError,
    404: ProductNotFoundError,
    422: ProductValidationError,
    503: NetworkError,
}


class HttpProductService:
    """Product service backed by the REST API (see inventory/main.py).

    Same async contract as MockProductService, so a ProductStore can use
    either one. HTTP failures are turned back into the service error types.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8085", timeout: float = 10,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self._transport) as client:
                r = await client.request(method, path, json=json)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Network error: {e}") from e

        if r.is_error:
            raise _error_from_response(r)
        return r.json()

    async def reset(self) -> None:
        await self._request("POST", "/reset")

    async def list_all(self) -> List[Product]:
        body = await self._request("GET", "/products")
        return [Product.model_validate(p) for p in body]

    async def get_by_id(self, product_id: str) -> Product:
        return Product.model_validate(await self._request("GET", f"/products/{product_id}"))

    async def create(self, data: CreateProductData) -> Product:
        payload = data.model_dump(mode="json", by_alias=True)
        return Product.model_validate(await self._request("POST", "/products", json=payload))

    async def update(self, data: UpdateProductData) -> Product:
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude={"id"})
        return Product.model_validate(await self._request("PATCH", f"/products/{data.id}", json=payload))

    async def delete_by_id(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}")


def _error_from_response(r: httpx.Response) -> ProductServiceError:
    try:
        body = r.json()
    except ValueError:
        body = None
    detail = body.get("detail", r.text) if isinstance(body, dict) else r.text
    if not isinstance(detail, str):
        # FastAPI request-validation errors come back as a list
        detail = "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)

    cls = _ERRORS_BY_STATUS.get(r.status_code)
    if cls is None:
        cls = ServerError if r.status_code >= 500 else ProductServiceError
    return cls(detail)


def connect(settings: Optional[Settings] = None) -> ProductService:
    """HTTP-backed service when settings.api_url is set, in-process mock otherwise."""
    settings = settings or default_settings
    if settings.api_url:
        return HttpProductService(base_url=settings.api_url)
    return MockProductService(settings=settings)
