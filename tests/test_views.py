import unittest
from datetime import date, timedelta

from shelfkeeper.core.constants import Category
from shelfkeeper.core.enrichment import EnrichedBatch
from shelfkeeper.core.views import select_view

TODAY = date(2024, 1, 10)


def _batch(batch_id, days, *, name="Milk", category=Category.DAIRY, status="active"):
    return EnrichedBatch(
        id=batch_id,
        barcode=batch_id,
        expiry_date=TODAY + timedelta(days=days),
        quantity=1,
        status=status,
        added_date=TODAY,
        product_name=name,
        category=category,
        price=1.0,
        days_until_expiry=days,
    )


class SelectViewTest(unittest.TestCase):
    def setUp(self):
        self.items = [
            _batch("late", 45, name="Cola", category=Category.DRINKS),
            _batch("month", 15, name="Cheddar"),
            _batch("soon", 2, name="Chicken", category=Category.MEAT_FISH),
            _batch("expired", -1, name="Yogurt"),
            _batch("today", 0, name="Milk"),
            _batch("week-edge", 7, name="Bread", category=Category.BAKERY),
        ]

    def test_week_horizon_excludes_expired(self):
        view = select_view(self.items, horizon="week")
        self.assertEqual([item.id for item in view], ["today", "soon", "week-edge"])

    def test_month_and_future_horizons(self):
        self.assertEqual([item.id for item in select_view(self.items, horizon="month")], ["month"])
        self.assertEqual([item.id for item in select_view(self.items, horizon="future")], ["late"])

    def test_sorted_soonest_first_without_filters(self):
        view = select_view(self.items)
        self.assertEqual([item.days_until_expiry for item in view], [-1, 0, 2, 7, 15, 45])

    def test_urgency_filter(self):
        self.assertEqual([item.id for item in select_view(self.items, status_filter="expired")], ["expired"])
        self.assertEqual(
            [item.id for item in select_view(self.items, status_filter="critical")],
            ["today", "soon"],
        )

    def test_predicates_combine(self):
        view = select_view(self.items, category="Dairy", search="CHED")
        self.assertEqual([item.id for item in view], ["month"])

    def test_all_category_matches_everything(self):
        self.assertEqual(len(select_view(self.items, category="All")), len(self.items))

    def test_horizon_skips_inactive_batches(self):
        items = [_batch("sold", 1, status="sold")]
        self.assertEqual(select_view(items, horizon="week"), [])

    def test_equal_days_keep_input_order(self):
        tied = [_batch(str(index), 2) for index in range(5)]
        view = select_view(tied, horizon="week")
        self.assertEqual([item.id for item in view], ["0", "1", "2", "3", "4"])

    def test_ties_stay_in_order_among_other_batches(self):
        items = [_batch("a", 5), _batch("x", 1), _batch("b", 5), _batch("y", 1), _batch("c", 5)]
        self.assertEqual([item.id for item in select_view(items)], ["x", "y", "a", "b", "c"])

    def test_meat_fish_identifier_filters_category(self):
        view = select_view(self.items, category="MeatFish")
        self.assertEqual([item.id for item in view], ["soon"])

    def test_unknown_filters_raise(self):
        with self.assertRaises(ValueError):
            select_view(self.items, horizon="year")
        with self.assertRaises(ValueError):
            select_view(self.items, status_filter="rotten")
        with self.assertRaises(ValueError):
            select_view(self.items, category="Toys")


if __name__ == "__main__":
    unittest.main()
