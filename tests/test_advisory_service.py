import base64
import unittest
from datetime import date

from shelfkeeper.core.constants import Category
from shelfkeeper.core.enrichment import EnrichedBatch
from shelfkeeper.core.errors import AdvisoryError
from shelfkeeper.core.records import ProductRecord
from shelfkeeper.schemas.advisory import BundleIdea, LabelAnalysis, PriceSuggestion
from shelfkeeper.services.advisory_service import (
    FALLBACK_BUNDLE,
    FALLBACK_PRICE_REASON,
    LABEL_FAILURE_MESSAGE,
    clearance_candidates,
    decode_image_data,
    scan_label,
    suggest_bundle,
    suggest_clearance_bundle,
    suggest_price,
)


class FailingAdvisor:
    def __init__(self):
        self.calls = 0

    def suggest_price(self, *args, **kwargs):
        self.calls += 1
        raise AdvisoryError("quota")

    def suggest_bundle(self, names):
        self.calls += 1
        raise AdvisoryError("quota")

    def analyze_label_image(self, image_bytes, mime_type):
        self.calls += 1
        raise AdvisoryError("quota")


class StubAdvisor:
    def __init__(self, analysis=None):
        self.analysis = analysis
        self.bundle_names = None

    def suggest_bundle(self, names):
        self.bundle_names = names
        return BundleIdea(title="Breakfast Bundle", tagline="Milk and bread, sorted.")

    def suggest_price(self, *args, **kwargs):
        return PriceSuggestion(suggested_price=0.99, reasoning="Due tomorrow")

    def analyze_label_image(self, image_bytes, mime_type):
        return self.analysis


def _batch(name, days):
    return EnrichedBatch(
        id=name,
        barcode=name,
        expiry_date=date(2024, 1, 10),
        quantity=1,
        status="active",
        added_date=None,
        product_name=name,
        category=Category.DAIRY,
        price=1.0,
        days_until_expiry=days,
    )


class FallbackTest(unittest.TestCase):
    def test_price_fallback_is_half_price(self):
        suggestion = suggest_price(FailingAdvisor(), "Milk", 3.0, 1, Category.DAIRY)
        self.assertEqual(suggestion.suggested_price, 1.5)
        self.assertEqual(suggestion.reasoning, FALLBACK_PRICE_REASON)
        self.assertTrue(suggestion.fallback)

    def test_bundle_fallback(self):
        self.assertEqual(suggest_bundle(FailingAdvisor(), ["Milk"]), FALLBACK_BUNDLE)

    def test_successful_price_passes_through(self):
        suggestion = suggest_price(StubAdvisor(), "Milk", 3.0, 1, Category.DAIRY)
        self.assertEqual(suggestion.suggested_price, 0.99)
        self.assertFalse(suggestion.fallback)


class ClearanceBundleTest(unittest.TestCase):
    def test_candidates_are_unique_and_within_a_week(self):
        items = [_batch("Milk", 1), _batch("Milk", 3), _batch("Bread", 7), _batch("Cola", 8), _batch("Yogurt", -1)]
        self.assertEqual(clearance_candidates(items), ["Milk", "Bread"])

    def test_no_call_without_candidates(self):
        advisor = FailingAdvisor()
        self.assertIsNone(suggest_clearance_bundle(advisor, [_batch("Cola", 30)]))
        self.assertEqual(advisor.calls, 0)

    def test_bundle_for_candidates(self):
        advisor = StubAdvisor()
        bundle = suggest_clearance_bundle(advisor, [_batch("Milk", 1), _batch("Bread", 2)])
        self.assertEqual(bundle.title, "Breakfast Bundle")
        self.assertEqual(advisor.bundle_names, ["Milk", "Bread"])


class LabelScanTest(unittest.TestCase):
    products = [ProductRecord("111", "Semi Skimmed Milk", Category.DAIRY, 1.25)]

    def test_known_barcode_uses_catalogue(self):
        advisor = StubAdvisor(LabelAnalysis(barcode="111", productName="Milk?", expiryDate="2024-01-12"))
        result = scan_label(advisor, b"img", "image/jpeg", self.products)
        self.assertFalse(result.is_new_product)
        self.assertEqual(result.product_name, "Semi Skimmed Milk")
        self.assertEqual(result.price, 1.25)
        self.assertEqual(result.expiry_date, date(2024, 1, 12))

    def test_new_barcode_uses_analysis(self):
        advisor = StubAdvisor(LabelAnalysis(barcode="999", productName="Oat Milk", category="Dairy"))
        result = scan_label(advisor, b"img", "image/jpeg", self.products)
        self.assertTrue(result.is_new_product)
        self.assertEqual(result.product_name, "Oat Milk")
        self.assertEqual(result.category, Category.DAIRY)

    def test_analysis_accepts_category_identifier(self):
        self.assertEqual(LabelAnalysis(barcode="1", category="MeatFish").category, Category.MEAT_FISH)
        self.assertIsNone(LabelAnalysis(barcode="1", category="Toys").category)

    def test_failure_is_surfaced(self):
        with self.assertRaises(AdvisoryError) as ctx:
            scan_label(FailingAdvisor(), b"img", "image/jpeg", self.products)
        self.assertEqual(str(ctx.exception), LABEL_FAILURE_MESSAGE)


class DecodeImageTest(unittest.TestCase):
    def test_strips_data_url_prefix(self):
        encoded = base64.b64encode(b"image-bytes").decode("ascii")
        self.assertEqual(decode_image_data("data:image/png;base64," + encoded), b"image-bytes")

    def test_rejects_invalid_base64(self):
        with self.assertRaises(ValueError):
            decode_image_data("%%%")


if __name__ == "__main__":
    unittest.main()
