from datetime import date, datetime, timedelta


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            try:
                return datetime.fromisoformat(value_text).date()
            except ValueError:
                return None
    return None


def days_until_expiry(expiry_date, today=None) -> int:
    """Whole calendar days from today to the expiry date (negative once expired)."""
    expiry = normalize_date(expiry_date)
    if expiry is None:
        raise ValueError("Invalid expiry date: {!r}".format(expiry_date))
    current = normalize_date(today) if today is not None else date.today()
    if current is None:
        raise ValueError("Invalid reference date: {!r}".format(today))
    return (expiry - current).days


def days_from_today(days: int, today=None) -> date:
    current = normalize_date(today) if today is not None else date.today()
    return current + timedelta(days=days)
