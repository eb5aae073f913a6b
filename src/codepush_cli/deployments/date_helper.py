from datetime import datetime


def format_date(value: datetime) -> str:
    """Render a release timestamp in local time, e.g. ``Jun 16, 2025 3:04 PM``."""
    local = value.astimezone() if value.tzinfo is not None else value
    hour = local.hour % 12 or 12
    meridiem = "PM" if local.hour >= 12 else "AM"
    return f"{local:%b} {local.day}, {local.year} {hour}:{local.minute:02d} {meridiem}"
