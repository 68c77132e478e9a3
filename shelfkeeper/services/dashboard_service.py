from dataclasses import asdict

from shelfkeeper.core.expiry_rules import classify
from shelfkeeper.core.stats import has_urgent_alerts, summarize
from shelfkeeper.core.views import normalize_horizon, select_view


def batch_payload(batch, alert_settings):
    setting = alert_settings.lookup_or_default(batch.category)
    return {
        "id": batch.id,
        "barcode": batch.barcode,
        "expiry_date": batch.expiry_date,
        "quantity": batch.quantity,
        "status": batch.status,
        "added_date": batch.added_date,
        "product_name": batch.product_name,
        "category": batch.category,
        "price": batch.price,
        "days_until_expiry": batch.days_until_expiry,
        "stock_value": round(batch.stock_value, 2),
        "urgency": classify(batch.days_until_expiry, setting),
    }


def dashboard_summary(workspace, horizon="week"):
    """Headline stats plus the batches for one expiry horizon tab."""
    horizon = normalize_horizon(horizon) or "week"
    enriched = workspace.enriched()
    stats = summarize(enriched)
    view = select_view(enriched, horizon=horizon, alert_settings=workspace.alert_settings)
    return {
        "today": workspace.today(),
        "horizon": horizon,
        "stats": asdict(stats),
        "has_urgent_alerts": has_urgent_alerts(enriched),
        "currency": workspace.profile.currency,
        "results": [batch_payload(batch, workspace.alert_settings) for batch in view],
    }


def inventory_listing(workspace, status_filter=None, category=None, search=None):
    view = select_view(
        workspace.enriched(),
        status_filter=status_filter,
        category=category,
        search=search,
        alert_settings=workspace.alert_settings,
    )
    results = [batch_payload(batch, workspace.alert_settings) for batch in view]
    return {"count": len(results), "results": results}


def report_summary(workspace):
    report = workspace.report()
    payload = asdict(report)
    payload["currency"] = workspace.profile.currency
    return payload


__all__ = ["batch_payload", "dashboard_summary", "inventory_listing", "report_summary"]
