import unittest

from shelfkeeper.core.constants import Category
from shelfkeeper.core.errors import ConfigurationError
from shelfkeeper.core.expiry_rules import (
    AlertSetting,
    AlertSettings,
    classify,
    classify_with_default,
    default_alert_settings,
)
from shelfkeeper.core.records import match_category, parse_category


class ClassifyTest(unittest.TestCase):
    def test_dairy_boundaries(self):
        setting = AlertSetting(Category.DAIRY, critical_days=3, warning_days=7)
        cases = [
            (-1, "expired"),
            (0, "critical"),
            (3, "critical"),
            (4, "warning"),
            (7, "warning"),
            (8, "safe"),
        ]
        for days, expected in cases:
            with self.subTest(days=days):
                self.assertEqual(classify(days, setting), expected)

    def test_unknown_category_uses_household(self):
        self.assertEqual(classify_with_default("Pet Food", 0), "critical")
        self.assertEqual(classify_with_default("Pet Food", 1), "safe")
        self.assertEqual(classify_with_default(None, -2), "expired")

    def test_category_lookup_by_value(self):
        settings = default_alert_settings()
        self.assertEqual(settings.lookup("Soft Drinks").warning_days, 60)
        self.assertEqual(classify_with_default(Category.CANNED, 60), "warning")

    def test_defaults_cover_every_category(self):
        settings = default_alert_settings()
        self.assertEqual(len(settings), len(Category))


class AlertSettingsTest(unittest.TestCase):
    def test_rejects_critical_above_warning(self):
        with self.assertRaises(ConfigurationError):
            AlertSettings(
                [
                    AlertSetting(Category.HOUSEHOLD, 0, 0),
                    AlertSetting(Category.DAIRY, 8, 7),
                ]
            )

    def test_requires_household_fallback(self):
        with self.assertRaises(ConfigurationError):
            AlertSettings([AlertSetting(Category.DAIRY, 3, 7)])


class ClassifyMonotonicTest(unittest.TestCase):
    SEVERITY = {"expired": 3, "critical": 2, "warning": 1, "safe": 0}

    def test_severity_never_increases_as_expiry_moves_out(self):
        for setting in default_alert_settings():
            with self.subTest(category=setting.category.value):
                levels = [self.SEVERITY[classify(days, setting)] for days in range(-5, 120)]
                self.assertEqual(levels, sorted(levels, reverse=True))


class CategoryMatchingTest(unittest.TestCase):
    def test_identifiers_and_display_values(self):
        cases = [
            ("MeatFish", Category.MEAT_FISH),
            ("Meat & Fish", Category.MEAT_FISH),
            ("MEAT_FISH", Category.MEAT_FISH),
            ("Produce", Category.PRODUCE),
            ("Fresh Produce", Category.PRODUCE),
            ("Drinks", Category.DRINKS),
            ("Canned", Category.CANNED),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(match_category(value), expected)
                self.assertEqual(parse_category(value), expected)

    def test_unknown_value(self):
        self.assertIsNone(match_category("Toys"))
        self.assertIsNone(match_category(""))
        self.assertEqual(parse_category("Toys"), Category.HOUSEHOLD)

    def test_meat_fish_identifier_uses_its_own_thresholds(self):
        self.assertEqual(classify_with_default("MeatFish", 1), "critical")
        self.assertEqual(classify_with_default("MeatFish", 5), "warning")


if __name__ == "__main__":
    unittest.main()
