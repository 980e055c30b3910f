from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Shared schema config: snake_case attributes, camelCase on the wire.
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateProductData(BaseModel):
    model_config = _WIRE

    name: str
    description: str
    price: float = Field(ge=0)
    category: str
    in_stock: bool


class ProductPatch(BaseModel):
    model_config = _WIRE

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    in_stock: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually provided."""
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})


class UpdateProductData(ProductPatch):
    id: str


class Product(CreateProductData):
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    updated_at: datetime


class InventorySummary(BaseModel):
    total_products: int = 0
    in_stock: int = 0
    out_of_stock: int = 0
    total_value: float = 0.0


def utc_now() -> datetime:
    # millisecond precision, matching what the wire format carries
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_product(product_id: str, data: CreateProductData, now: Optional[datetime] = None) -> Product:
    now = now or utc_now()
    return Product(
        id=product_id,
        created_at=now,
        updated_at=now,
        **data.model_dump(),
    )


def apply_patch(product: Product, patch: ProductPatch, now: Optional[datetime] = None) -> Product:
    """Merge the provided fields of `patch` over `product`.

    Omitted fields keep their value; `id` and `created_at` never change and
    `updated_at` is bumped.
    """
    update = patch.changes()
    update["updated_at"] = now or utc_now()
    return product.model_copy(update=update)


def summarize(products: Iterable[Product]) -> InventorySummary:
    summary = InventorySummary()
    for p in products:
        summary.total_products += 1
        if p.in_stock:
            summary.in_stock += 1
        else:
            summary.out_of_stock += 1
        summary.total_value += p.price
    summary.total_value = round(summary.total_value, 2)
    return summary
