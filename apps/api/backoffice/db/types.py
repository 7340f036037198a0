"""
Column types that translate legacy storage formats at the database boundary.
"""
import json
import logging
from decimal import Decimal

from sqlalchemy import String, Text
from sqlalchemy.types import TypeDecorator

from backoffice.core.formatting import parse_amount

logger = logging.getLogger(__name__)

TRUTHY = {"si", "sí", "yes", "y", "true", "1"}


class YesNo(TypeDecorator):
    """Boolean stored as a "si"/"no" string."""
    impl = String(3)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "no"
        if isinstance(value, str):
            value = value.strip().lower() in TRUTHY
        return "si" if value else "no"

    def process_result_value(self, value, dialect):
        if value is None:
            return False
        return str(value).strip().lower() in TRUTHY


class LocaleDecimal(TypeDecorator):
    """
    Money amount stored as text.

    Older rows hold locale strings such as "12,50"; new rows are written
    with a dot separator and two decimals.
    """
    impl = String(20)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(parse_amount(value))

    def process_result_value(self, value, dialect) -> Decimal:
        return parse_amount(value)


class JSONList(TypeDecorator):
    """A list serialized as JSON text in a single column."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "[]"
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return []
        if isinstance(value, list):
            return value
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Discarding unparseable JSON list column: %r", value)
            return []
        return parsed if isinstance(parsed, list) else []
