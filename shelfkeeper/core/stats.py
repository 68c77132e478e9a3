from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from shelfkeeper.core.constants import (
    BATCH_STATUSES,
    CRITICAL_WINDOW_DAYS,
    MARKDOWN_RECOVERY_RATE,
    URGENT_ALERT_DAYS,
    VALUE_AT_RISK_WINDOW_DAYS,
)
from shelfkeeper.core.enrichment import EnrichedBatch, enrich
from shelfkeeper.core.records import BatchRecord, ProductRecord


@dataclass(frozen=True)
class DashboardStats:
    critical_72h: int
    expired_count: int
    value_at_risk_7d: float


def summarize(enriched: Iterable[EnrichedBatch]) -> DashboardStats:
    critical = 0
    expired = 0
    value_at_risk = 0.0
    for batch in enriched:
        days = batch.days_until_expiry
        if days < 0:
            expired += 1
            continue
        if days <= CRITICAL_WINDOW_DAYS:
            critical += 1
        if days <= VALUE_AT_RISK_WINDOW_DAYS:
            value_at_risk += batch.stock_value
    return DashboardStats(
        critical_72h=critical,
        expired_count=expired,
        value_at_risk_7d=round(value_at_risk, 2),
    )


def has_urgent_alerts(enriched: Iterable[EnrichedBatch], threshold_days: int = URGENT_ALERT_DAYS) -> bool:
    return any(batch.days_until_expiry <= threshold_days for batch in enriched)


@dataclass(frozen=True)
class ReportSummary:
    status_counts: dict = field(default_factory=dict)
    wasted_batches: int = 0
    reduced_batches: int = 0
    wasted_cost: float = 0.0
    recovered_revenue: float = 0.0
    recovery_rate: float = MARKDOWN_RECOVERY_RATE


def build_report(
    batches: Iterable[BatchRecord],
    products: Iterable[ProductRecord],
    today: Optional[date] = None,
    *,
    recovery_rate: float = MARKDOWN_RECOVERY_RATE,
) -> ReportSummary:
    """Waste versus markdown outcome across every batch status.

    Reduced stock is assumed to sell at ``recovery_rate`` of its price;
    wasted stock is a full loss.
    """
    enriched = enrich(batches, products, today, active_only=False)

    status_counts = {status: 0 for status in BATCH_STATUSES}
    wasted_cost = 0.0
    recovered = 0.0
    for batch in enriched:
        status_counts[batch.status] = status_counts.get(batch.status, 0) + 1
        if batch.status == "wasted":
            wasted_cost += batch.stock_value
        elif batch.status == "reduced":
            recovered += batch.stock_value * recovery_rate

    return ReportSummary(
        status_counts=status_counts,
        wasted_batches=status_counts["wasted"],
        reduced_batches=status_counts["reduced"],
        wasted_cost=round(wasted_cost, 2),
        recovered_revenue=round(recovered, 2),
        recovery_rate=recovery_rate,
    )


__all__ = ["DashboardStats", "ReportSummary", "build_report", "has_urgent_alerts", "summarize"]
