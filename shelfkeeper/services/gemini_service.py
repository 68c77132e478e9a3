import base64
import json
import logging
from urllib import error, request
from urllib.parse import quote, urlparse

from pydantic import ValidationError

from shelfkeeper.config import get_settings
from shelfkeeper.core.constants import MAX_BUNDLE_ITEMS, Category
from shelfkeeper.core.errors import AdvisoryError, ConfigurationError
from shelfkeeper.schemas.advisory import BundleIdea, LabelAnalysis, PriceSuggestion

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}

LABEL_PROMPT = (
    "Analyze this retail product image. Extract the Barcode (numbers), the Expiry Date "
    "(YYYY-MM-DD), the Product Name, and Category. If you can't clearly see the date, "
    "estimate or leave null."
)

LABEL_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "barcode": {"type": "STRING"},
        "expiryDate": {"type": "STRING", "nullable": True},
        "productName": {"type": "STRING", "nullable": True},
        "category": {
            "type": "STRING",
            "nullable": True,
            "enum": [member.value for member in Category],
        },
    },
    "required": ["barcode"],
}

BUNDLE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "tagline": {"type": "STRING"},
    },
    "required": ["title", "tagline"],
}

PRICE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedPrice": {"type": "NUMBER"},
        "reasoning": {"type": "STRING"},
    },
    "required": ["suggestedPrice", "reasoning"],
}


def build_bundle_prompt(product_names):
    names = [str(name).strip() for name in product_names if str(name).strip()]
    if not names:
        raise ValueError("At least one product name is required")
    prompt_items = ", ".join(names[:MAX_BUNDLE_ITEMS])
    if len(names) > 1:
        return (
            "I have a convenience store. These items are expiring soon: {}. "
            'Suggest a creative "Bundle Deal" name and a short 1-sentence marketing hook.'
        ).format(prompt_items)
    return (
        "I have a convenience store. This item is expiring soon: {}. "
        'Suggest a creative "Flash Sale" name and a short 1-sentence marketing hook.'
    ).format(prompt_items)


_CURRENCY_SYMBOLS = {"GBP": "£", "USD": "$", "EUR": "€"}


def build_price_prompt(product_name, current_price, days_until_expiry, category, currency="GBP"):
    category_value = getattr(category, "value", category)
    currency_code = str(currency or "GBP").strip().upper()
    currency_symbol = _CURRENCY_SYMBOLS.get(currency_code, currency_code + " ")
    return (
        "Product: {}\n"
        "Original Price: {}{:.2f}\n"
        "Days until expiry: {}\n"
        "Category: {}\n\n"
        "Suggest a clearance price to ensure it sells before expiry. "
        'Return JSON: { "suggestedPrice": number, "reasoning": string }'
    ).format(
        product_name,
        currency_symbol,
        float(current_price),
        days_until_expiry,
        category_value or "Unknown",
    )


def build_request_body(parts, schema):
    return {
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        },
    }


def extract_json(response_payload):
    """Pull the JSON document out of a generateContent response."""
    try:
        candidates = response_payload.get("candidates") or []
        parts = candidates[0]["content"]["parts"]
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise AdvisoryError("Gemini response had no candidates") from exc

    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()
    if not text:
        raise AdvisoryError("Gemini response was empty")
    try:
        result = json.loads(text)
    except ValueError as exc:
        raise AdvisoryError("Gemini response was not valid JSON") from exc
    if not isinstance(result, dict):
        raise AdvisoryError("Gemini response was not a JSON object")
    return result


def _validate_api_url(api_url):
    parsed = urlparse(api_url)
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise ConfigurationError("GEMINI_API_URL must be an absolute HTTP(S) URL")
    return api_url.rstrip("/")


def _raise_http_error(exc):
    body = ""
    try:
        body_bytes = exc.read()
        if body_bytes:
            body = body_bytes.decode("utf-8", errors="replace").strip()
    except (OSError, ValueError):
        body = ""

    if body:
        raise AdvisoryError("Gemini API error: HTTP {} {}".format(exc.code, body)) from exc
    raise AdvisoryError("Gemini API error: HTTP {}".format(exc.code)) from exc


class GeminiAdvisoryGateway:
    """The three advisory calls, each a single JSON-in/JSON-out generateContent request."""

    def __init__(self, api_key, *, model="gemini-2.5-flash", api_url=None, timeout=30):
        api_key = (api_key or "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")
        self._api_key = api_key
        self.model = model
        self._api_url = _validate_api_url(
            api_url or "https://generativelanguage.googleapis.com/v1beta/models"
        )
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings=None):
        settings = settings or get_settings()
        return cls(
            settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            api_url=settings.GEMINI_API_URL,
            timeout=settings.GEMINI_TIMEOUT_SECONDS,
        )

    @property
    def endpoint(self):
        return "{}/{}:generateContent".format(self._api_url, quote(self.model, safe=""))

    def generate_json(self, parts, schema, *, operation="generate"):
        payload = json.dumps(build_request_body(parts, schema)).encode("utf-8")
        req = request.Request(
            self.endpoint,
            data=payload,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self._api_key,
            },
        )

        try:
            with request.urlopen(req, timeout=self._timeout) as response:  # nosec B310
                status_code = response.getcode()
                if status_code < 200 or status_code >= 300:
                    raise AdvisoryError("Gemini API error: HTTP {}".format(status_code))
                raw = response.read()
        except error.HTTPError as exc:
            _raise_http_error(exc)
        except error.URLError as exc:
            raise AdvisoryError("Gemini API error: {}".format(exc.reason)) from exc
        except (TimeoutError, OSError) as exc:
            raise AdvisoryError("Gemini API error: {}".format(exc)) from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise AdvisoryError("Gemini API returned a non-JSON body") from exc
        logger.debug("Gemini %s call succeeded", operation, extra={"operation": operation})
        return extract_json(response_payload)

    def analyze_label_image(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> LabelAnalysis:
        if not image_bytes:
            raise ValueError("Image data required")
        parts = [
            {
                "inlineData": {
                    "mimeType": mime_type or "image/jpeg",
                    "data": base64.b64encode(image_bytes).decode("ascii"),
                }
            },
            {"text": LABEL_PROMPT},
        ]
        result = self.generate_json(parts, LABEL_SCHEMA, operation="analyze_label_image")
        try:
            return LabelAnalysis.model_validate(result)
        except ValidationError as exc:
            raise AdvisoryError("Gemini label analysis returned no barcode") from exc

    def suggest_bundle(self, product_names) -> BundleIdea:
        prompt = build_bundle_prompt(product_names)
        result = self.generate_json([{"text": prompt}], BUNDLE_SCHEMA, operation="suggest_bundle")
        try:
            return BundleIdea.model_validate(result)
        except ValidationError as exc:
            raise AdvisoryError("Gemini bundle suggestion was incomplete") from exc

    def suggest_price(
        self, product_name, current_price, days_until_expiry, category, *, currency="GBP"
    ) -> PriceSuggestion:
        prompt = build_price_prompt(
            product_name, current_price, days_until_expiry, category, currency=currency
        )
        result = self.generate_json([{"text": prompt}], PRICE_SCHEMA, operation="suggest_price")
        try:
            return PriceSuggestion.model_validate(result)
        except ValidationError as exc:
            raise AdvisoryError("Gemini price suggestion was incomplete") from exc


__all__ = [
    "GeminiAdvisoryGateway",
    "build_bundle_prompt",
    "build_price_prompt",
    "build_request_body",
    "extract_json",
]
