import unittest
from datetime import date

from shelfkeeper.core.constants import Category
from shelfkeeper.core.enrichment import enrich
from shelfkeeper.core.records import BatchRecord, ProductRecord
from shelfkeeper.core.stats import build_report, has_urgent_alerts, summarize

TODAY = date(2024, 1, 10)

PRODUCTS = [
    ProductRecord("111", "Milk", Category.DAIRY, 1.25),
    ProductRecord("222", "Cola", Category.DRINKS, 1.50),
]


class SummarizeTest(unittest.TestCase):
    def test_dairy_batch_due_in_two_days(self):
        batches = [BatchRecord("b1", "111", date(2024, 1, 12), 6)]
        stats = summarize(enrich(batches, PRODUCTS, TODAY))
        self.assertEqual(stats.critical_72h, 1)
        self.assertEqual(stats.expired_count, 0)
        self.assertAlmostEqual(stats.value_at_risk_7d, 7.50)

    def test_expired_batch_excluded_from_value_at_risk(self):
        batches = [BatchRecord("b1", "111", date(2024, 1, 5), 10)]
        stats = summarize(enrich(batches, PRODUCTS, TODAY))
        self.assertEqual(stats.expired_count, 1)
        self.assertEqual(stats.critical_72h, 0)
        self.assertEqual(stats.value_at_risk_7d, 0.0)

    def test_windows(self):
        batches = [
            BatchRecord("b1", "222", date(2024, 1, 13), 2),
            BatchRecord("b2", "222", date(2024, 1, 17), 2),
            BatchRecord("b3", "222", date(2024, 1, 18), 2),
            BatchRecord("b4", "999", date(2024, 1, 11), 5),
        ]
        stats = summarize(enrich(batches, PRODUCTS, TODAY))
        self.assertEqual(stats.critical_72h, 2)
        self.assertAlmostEqual(stats.value_at_risk_7d, 6.0)

    def test_price_change_only_moves_value_inside_the_week(self):
        batches = [
            BatchRecord("b1", "111", date(2024, 1, 13), 2),
            BatchRecord("b2", "111", date(2024, 1, 30), 5),
            BatchRecord("b3", "111", date(2024, 1, 8), 4),
            BatchRecord("b4", "222", date(2024, 1, 12), 1),
        ]
        before = summarize(enrich(batches, PRODUCTS, TODAY))
        repriced = [ProductRecord("111", "Milk", Category.DAIRY, 2.25), PRODUCTS[1]]
        after = summarize(enrich(batches, repriced, TODAY))
        # only b1 (2 units, 3 days out) is inside the window for the repriced product
        self.assertAlmostEqual(after.value_at_risk_7d - before.value_at_risk_7d, 2 * 1.0)
        self.assertEqual(after.critical_72h, before.critical_72h)
        self.assertEqual(after.expired_count, before.expired_count)

    def test_empty(self):
        stats = summarize([])
        self.assertEqual((stats.critical_72h, stats.expired_count, stats.value_at_risk_7d), (0, 0, 0.0))

    def test_urgent_alerts(self):
        soon = enrich([BatchRecord("b1", "111", date(2024, 1, 12), 1)], PRODUCTS, TODAY)
        later = enrich([BatchRecord("b1", "111", date(2024, 1, 13), 1)], PRODUCTS, TODAY)
        self.assertTrue(has_urgent_alerts(soon))
        self.assertFalse(has_urgent_alerts(later))


class ReportTest(unittest.TestCase):
    def test_waste_and_recovery(self):
        batches = [
            BatchRecord("b1", "111", date(2024, 1, 8), 4, status="wasted"),
            BatchRecord("b2", "222", date(2024, 1, 11), 10, status="reduced"),
            BatchRecord("b3", "222", date(2024, 2, 1), 3),
            BatchRecord("b4", "111", date(2024, 1, 9), 2, status="sold"),
        ]
        report = build_report(batches, PRODUCTS, TODAY)
        self.assertEqual(report.status_counts, {"active": 1, "reduced": 1, "wasted": 1, "sold": 1})
        self.assertEqual(report.wasted_batches, 1)
        self.assertEqual(report.reduced_batches, 1)
        self.assertAlmostEqual(report.wasted_cost, 5.0)
        self.assertAlmostEqual(report.recovered_revenue, 7.5)


if __name__ == "__main__":
    unittest.main()
