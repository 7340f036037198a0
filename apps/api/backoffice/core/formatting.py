"""
Display and parsing helpers shared by the API and the dashboard client.

Stored values come in several shapes: order times as "H:MM" or "HH:MM",
timestamps as naive UTC datetimes or ISO strings, totals as decimals or as
locale strings with a comma separator. Everything is normalized here, once.
"""
import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Tuple, Union

import pytz


EMPTY_DATE = "--/--/----"
EMPTY_TIME = "--:--"

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

CENTS = Decimal("0.01")

# Category key -> (badge style key, label)
CATEGORY_MAP = {
    "entrante": ("entrantes", "Entrantes"),
    "pescado": ("pescados", "Pescados"),
    "pasta": ("pastas", "Pastas"),
    "carne": ("carnes", "Carnes"),
    "postre": ("postres", "Postres"),
}

CATEGORY_STYLES = {
    "entrantes": "bg-green-100 text-green-800 border-green-200",
    "pescados": "bg-blue-100 text-blue-800 border-blue-200",
    "pastas": "bg-yellow-100 text-yellow-800 border-yellow-200",
    "carnes": "bg-red-100 text-red-800 border-red-200",
    "postres": "bg-purple-100 text-purple-800 border-purple-200",
    "default": "bg-gray-100 text-gray-800 border-gray-200",
}

ORDER_STATUS_LABELS = {
    "pending": ("Pendiente", "bg-yellow-500"),
    "preparing": ("Preparando", "bg-blue-500"),
    "ready": ("Listo", "bg-green-500"),
    "delivered": ("Entregado", "bg-gray-500"),
    "cancelled": ("Cancelado", "bg-red-500"),
}

RESERVATION_STATUS_LABELS = {
    "confirmed": ("Confirmada", "bg-green-500"),
    "pending": ("Pendiente", "bg-yellow-500"),
    "cancelled": ("Cancelada", "bg-red-500"),
    "completed": ("Completada", "bg-gray-500"),
}


def parse_amount(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse a money amount that may be a number or a locale string.

    Examples:
        >>> parse_amount("12,50")
        Decimal('12.50')
        >>> parse_amount(None)
        Decimal('0.00')
    """
    if value is None or value == "":
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if isinstance(value, (int, float)):
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

    text = str(value).strip().replace(" ", "")
    # "1.234,50" -> thousands dot, decimal comma
    if "," in text and "." in text:
        text = text.replace(".", "").replace(",", ".")
    else:
        text = text.replace(",", ".")
    try:
        return Decimal(text).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return Decimal("0.00")


def normalize_time(value: Union[str, time, datetime, None]) -> Optional[str]:
    """
    Normalize a time-of-day to "HH:MM".

    Accepts "H:MM", "HH:MM", "HH:MM:SS", ISO timestamps and time/datetime
    objects. Returns None for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")

    text = str(value).strip()
    if "T" in text:
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%H:%M")
        except ValueError:
            return None

    match = _TIME_RE.match(text)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return f"{hours:02d}:{minutes:02d}"


def to_local(dt: datetime, tz_name: str) -> datetime:
    """Convert a datetime to restaurant-local time. Naive values are UTC."""
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    return dt.astimezone(pytz.timezone(tz_name))


def local_now(tz_name: str) -> datetime:
    return datetime.now(pytz.UTC).astimezone(pytz.timezone(tz_name))


def local_today(tz_name: str) -> date:
    return local_now(tz_name).date()


def local_date(value: Union[str, date, datetime, None], tz_name: str) -> Optional[date]:
    """
    Resolve the restaurant-local calendar date of a stored value.

    Plain dates and "YYYY-MM-DD" strings are taken as-is; timestamps are
    shifted into the restaurant timezone first.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local(value, tz_name).date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if _ISO_DATE_RE.match(text):
        return date.fromisoformat(text)
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_local(parsed, tz_name).date()


def order_time(created_at: Optional[datetime], stored_time: Optional[str], tz_name: str) -> Optional[str]:
    """The order's time of day: the stored value if usable, else derived from created_at."""
    normalized = normalize_time(stored_time)
    if normalized:
        return normalized
    if created_at is not None:
        return to_local(created_at, tz_name).strftime("%H:%M")
    return None


def order_datetime(created_at: Optional[datetime], stored_time: Optional[str], tz_name: str) -> Optional[str]:
    """
    Combine the local date of created_at with the order time.

    Returns "YYYY-MM-DD HH:MM", or None when there is nothing to show.
    """
    when = order_time(created_at, stored_time, tz_name)
    if when is None:
        return None
    day = local_date(created_at, tz_name) if created_at is not None else local_today(tz_name)
    return f"{day.isoformat()} {when}"


def format_date_display(value: Union[str, date, datetime, None]) -> str:
    """Render a date as DD/MM/YYYY."""
    if value is None or value == "":
        return EMPTY_DATE
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")

    text = str(value).strip()
    date_part = text.split("T")[0].split(" ")[0]
    if _ISO_DATE_RE.match(date_part):
        try:
            return date.fromisoformat(date_part).strftime("%d/%m/%Y")
        except ValueError:
            return EMPTY_DATE
    return EMPTY_DATE


def format_time_display(value: Union[str, time, datetime, None]) -> str:
    return normalize_time(value) or EMPTY_TIME


def category_badge(category: Optional[str]) -> Tuple[str, str, str]:
    """
    Look up the badge for a free-text category.

    Returns (style key, label, css classes); unknown categories fall back
    to the generic "Otro" badge.
    """
    normalized = str(category).lower().strip() if category else ""
    key, label = CATEGORY_MAP.get(normalized, ("default", "Otro"))
    return key, label, CATEGORY_STYLES[key]


def status_badge(status: Optional[str], labels: dict) -> Tuple[str, str]:
    """Label and colour for a status value; unknown values are shown raw in grey."""
    if status in labels:
        return labels[status]
    return (status or "", "bg-gray-500")
