# inventory/main.py
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core import CreateProductData, Product, ProductPatch, UpdateProductData
from .errors import ProductServiceError
from .service import MockProductService

logger = logging.getLogger(__name__)


def create_app(service: Optional[MockProductService] = None) -> FastAPI:
    app = FastAPI(title="inventory-store (mock product API)")
    app.state.service = service or MockProductService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # or restrict to ["http://localhost:5173"]
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProductServiceError)
    async def service_error_handler(request: Request, exc: ProductServiceError):
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products", response_model=List[Product])
    async def list_products():
        return await app.state.service.list_all()

    @app.get("/products/{product_id}", response_model=Product)
    async def get_product(product_id: str):
        return await app.state.service.get_by_id(product_id)

    @app.post("/products", response_model=Product, status_code=201)
    async def create_product(payload: CreateProductData):
        return await app.state.service.create(payload)

    @app.patch("/products/{product_id}", response_model=Product)
    async def update_product(product_id: str, payload: ProductPatch):
        data = UpdateProductData(id=product_id, **payload.changes())
        return await app.state.service.update(data)

    @app.delete("/products/{product_id}")
    async def delete_product(product_id: str):
        await app.state.service.delete_by_id(product_id)
        return {"id": product_id, "status": "deleted"}

    # ---------------------------
    # Utility: reset (for tests/demo)
    # ---------------------------
    @app.post("/reset")
    async def reset_all():
        app.state.service.reset()
        return {"status": "reset"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
