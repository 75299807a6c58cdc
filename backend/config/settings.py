# backend/config/settings.py
import os
import re
from datetime import timedelta
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """'3600' / '45m' / '24h' / '7d' -> timedelta"""
    m = _DURATION_RE.match(value or "")
    if not m:
        raise ValueError(f"invalid duration: {value!r}")
    amount, unit = m.groups()
    return timedelta(**{_UNITS[unit]: int(amount)})


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = parse_duration(os.getenv("JWT_EXPIRES_IN", "24h"))

SESSION_EXTENSION = parse_duration(os.getenv("SESSION_EXTENSION", "24h"))
SESSION_RETENTION_DAYS = int(os.getenv("SESSION_RETENTION_DAYS", "30"))

SERVICE_FEE_RATE = Decimal(os.getenv("SERVICE_FEE_RATE", "0.05"))
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
CURRENCY = os.getenv("CURRENCY", "DH")

PORT = int(os.getenv("PORT", "8000"))
DEBUG = _flag("DEBUG", "false")
AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", "true")
