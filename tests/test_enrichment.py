import unittest
from datetime import date

from shelfkeeper.core.constants import Category
from shelfkeeper.core.enrichment import enrich, index_products
from shelfkeeper.core.records import BatchRecord, ProductRecord

TODAY = date(2024, 1, 10)


class EnrichmentTest(unittest.TestCase):
    def setUp(self):
        self.products = [ProductRecord("111", "Milk", Category.DAIRY, 1.25)]

    def test_joins_product_and_counts_days(self):
        batches = [BatchRecord("b1", "111", date(2024, 1, 12), 6)]
        [item] = enrich(batches, self.products, TODAY)
        self.assertEqual(item.product_name, "Milk")
        self.assertEqual(item.category, Category.DAIRY)
        self.assertEqual(item.days_until_expiry, 2)
        self.assertAlmostEqual(item.stock_value, 7.5)

    def test_unknown_product_defaults(self):
        batches = [BatchRecord("b2", "999", date(2024, 1, 10), 3)]
        [item] = enrich(batches, self.products, TODAY)
        self.assertEqual(item.product_name, "Unknown Product")
        self.assertEqual(item.category, Category.HOUSEHOLD)
        self.assertEqual(item.price, 0.0)
        self.assertEqual(item.days_until_expiry, 0)

    def test_only_active_batches_by_default(self):
        batches = [
            BatchRecord("b1", "111", date(2024, 1, 12), 6),
            BatchRecord("b2", "111", date(2024, 1, 12), 6, status="wasted"),
        ]
        self.assertEqual([item.id for item in enrich(batches, self.products, TODAY)], ["b1"])
        self.assertEqual(len(enrich(batches, self.products, TODAY, active_only=False)), 2)

    def test_first_duplicate_barcode_wins(self):
        products = self.products + [ProductRecord("111", "Other Milk", Category.DAIRY, 9.0)]
        self.assertEqual(index_products(products)["111"].name, "Milk")

    def test_same_inputs_give_same_result(self):
        batches = [
            BatchRecord("b1", "111", date(2024, 1, 12), 6),
            BatchRecord("b2", "999", date(2024, 1, 5), 2),
        ]
        first = enrich(batches, self.products, TODAY)
        self.assertEqual(enrich(batches, self.products, TODAY), first)
        self.assertEqual(enrich(list(batches), list(self.products), TODAY), first)

    def test_invalid_expiry_raises(self):
        batches = [BatchRecord("b1", "111", "not-a-date", 1)]
        with self.assertRaises(ValueError):
            enrich(batches, self.products, TODAY)


if __name__ == "__main__":
    unittest.main()
