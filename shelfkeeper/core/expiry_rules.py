from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from shelfkeeper.core.constants import DEFAULT_ALERT_SETTINGS, FALLBACK_CATEGORY, Category
from shelfkeeper.core.errors import ConfigurationError
from shelfkeeper.core.records import parse_category


@dataclass(frozen=True)
class AlertSetting:
    category: Category
    critical_days: int
    warning_days: int


class AlertSettings:
    """Per-category urgency thresholds with an explicit Household fallback."""

    def __init__(self, settings: Iterable[AlertSetting]):
        self._by_category: dict[Category, AlertSetting] = {}
        for setting in settings:
            if setting.critical_days > setting.warning_days:
                raise ConfigurationError(
                    "Alert setting for {} has critical_days > warning_days".format(
                        setting.category.value
                    )
                )
            self._by_category.setdefault(setting.category, setting)
        if FALLBACK_CATEGORY not in self._by_category:
            raise ConfigurationError(
                "Alert settings must include the {} category".format(FALLBACK_CATEGORY.value)
            )

    @classmethod
    def defaults(cls) -> "AlertSettings":
        return cls(
            AlertSetting(category=category, critical_days=critical, warning_days=warning)
            for category, critical, warning in DEFAULT_ALERT_SETTINGS
        )

    def lookup(self, category) -> Optional[AlertSetting]:
        if category is None:
            return None
        return self._by_category.get(parse_category(category))

    def lookup_or_default(self, category) -> AlertSetting:
        return self.lookup(category) or self._by_category[FALLBACK_CATEGORY]

    def __iter__(self):
        return iter(self._by_category.values())

    def __len__(self):
        return len(self._by_category)


def classify(days_until_expiry: int, setting: AlertSetting) -> str:
    if days_until_expiry < 0:
        return "expired"
    if days_until_expiry <= setting.critical_days:
        return "critical"
    if days_until_expiry <= setting.warning_days:
        return "warning"
    return "safe"


def classify_with_default(category, days_until_expiry: int, alert_settings=None) -> str:
    if alert_settings is None:
        alert_settings = default_alert_settings()
    return classify(days_until_expiry, alert_settings.lookup_or_default(category))


@lru_cache
def default_alert_settings() -> AlertSettings:
    return AlertSettings.defaults()
