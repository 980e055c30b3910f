# tests/test_formatters.py
import re
from datetime import datetime, timezone

from inventory.core import CreateProductData, ProductPatch, apply_patch, new_product, summarize
from inventory.formatters import (
    capitalize_first_letter, format_date, format_datetime, format_price, truncate_text,
)


def test_format_price():
    assert format_price(99.99) == "$99.99"
    assert format_price(1299.99) == "$1,299.99"
    assert format_price(0) == "$0.00"
    assert format_price(99.9) == "$99.90"
    assert format_price(1000000) == "$1,000,000.00"
    assert format_price(-99.99) == "-$99.99"


def test_format_date():
    assert format_date("2024-01-15T10:00:00Z") == "Jan 15, 2024"
    assert format_date("2024-12-25T00:00:00Z") == "Dec 25, 2024"
    assert format_date("2024-01-15") == "Jan 15, 2024"
    assert format_date("2024-02-29T00:00:00Z") == "Feb 29, 2024"
    assert format_date(datetime(2024, 3, 1, tzinfo=timezone.utc)) == "Mar 1, 2024"


def test_format_datetime():
    result = format_datetime("2024-01-15T10:30:00Z")
    assert result == "January 15, 2024 at 10:30 AM"
    assert format_datetime("2024-01-15T00:00:00Z") == "January 15, 2024 at 12:00 AM"
    assert format_datetime("2024-01-15T12:00:00Z") == "January 15, 2024 at 12:00 PM"
    assert re.search(r"\d{1,2}:\d{2} (AM|PM)", format_datetime("2024-01-15T23:05:00Z"))


def test_capitalize_first_letter():
    assert capitalize_first_letter("hello") == "Hello"
    assert capitalize_first_letter("Hello") == "Hello"
    assert capitalize_first_letter("a") == "A"
    assert capitalize_first_letter("") == ""
    assert capitalize_first_letter("123abc") == "123abc"
    assert capitalize_first_letter("hello world") == "Hello world"


def test_truncate_text():
    assert truncate_text("Hello world", 5) == "Hello..."
    assert truncate_text("This is a very long text", 10) == "This is a ..."
    assert truncate_text("Hello", 10) == "Hello"
    assert truncate_text("Hello", 5) == "Hello"
    assert truncate_text("", 5) == ""
    assert truncate_text("Hello", 0) == "..."
    assert truncate_text("Hello", -1) == "Hell..."


# ---------------------------
# core helpers
# ---------------------------
def _laptop():
    data = CreateProductData(name="Laptop", description="fast", price=10, category="Electronics", in_stock=True)
    return new_product("1", data, datetime(2024, 1, 1, tzinfo=timezone.utc))


def test_apply_patch_keeps_omitted_fields():
    now = datetime(2024, 2, 1, tzinfo=timezone.utc)
    patched = apply_patch(_laptop(), ProductPatch(price=12), now)
    assert patched.price == 12
    assert patched.name == "Laptop"
    assert patched.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert patched.updated_at == now


def test_apply_patch_ignores_explicit_none():
    patched = apply_patch(_laptop(), ProductPatch(name=None, in_stock=False))
    assert patched.name == "Laptop"
    assert patched.in_stock is False


def test_product_wire_format_uses_camel_case():
    dumped = _laptop().model_dump(mode="json", by_alias=True)
    assert dumped["inStock"] is True
    assert dumped["createdAt"].startswith("2024-01-01T00:00:00")


def test_summarize_empty():
    s = summarize([])
    assert (s.total_products, s.in_stock, s.out_of_stock, s.total_value) == (0, 0, 0, 0.0)
