from datetime import date

from shelfkeeper.core.constants import Category
from shelfkeeper.core.dates import days_from_today
from shelfkeeper.core.records import BatchRecord, ProductRecord

DEMO_PRODUCTS = (
    ProductRecord("5010123456789", "Semi Skimmed Milk 1L", Category.DAIRY, 1.25),
    ProductRecord("5000111222333", "Hovis Best of Both Loaf", Category.BAKERY, 1.85),
    ProductRecord("5020333444555", "Cheddar Cheese Block 350g", Category.DAIRY, 3.50),
    ProductRecord("5449000000996", "Coca Cola 500ml", Category.DRINKS, 1.50),
    ProductRecord("5060001110001", "Chicken Breast Fillets 300g", Category.MEAT_FISH, 4.50),
    ProductRecord("5050666777888", "Greek Yogurt 500g", Category.DAIRY, 2.10),
    ProductRecord("8000500310427", "Nutella Hazelnut Spread", Category.SNACKS, 3.00),
    ProductRecord("0000000000001", "Test Sandwich BLT", Category.PRODUCE, 3.25),
)

# (id, barcode, expiry offset, quantity, added offset), offsets in days from today
_DEMO_BATCHES = (
    ("b1", "5010123456789", 1, 6, -5),
    ("b2", "5060001110001", 2, 4, -4),
    ("b3", "5000111222333", 4, 10, -2),
    ("b4", "5020333444555", 15, 12, -10),
    ("b5", "5449000000996", 90, 24, -20),
    ("b6", "5050666777888", -1, 2, -10),
)


def demo_batches(today: date = None) -> list[BatchRecord]:
    return [
        BatchRecord(
            id=batch_id,
            barcode=barcode,
            expiry_date=days_from_today(expiry_offset, today),
            quantity=quantity,
            status="active",
            added_date=days_from_today(added_offset, today),
        )
        for batch_id, barcode, expiry_offset, quantity, added_offset in _DEMO_BATCHES
    ]


__all__ = ["DEMO_PRODUCTS", "demo_batches"]
