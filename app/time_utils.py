from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.config import Settings


def now_local(settings: Settings) -> datetime:
    return datetime.now(ZoneInfo(settings.app_timezone))


def format_local_timestamp(settings: Settings, dt: datetime | None = None) -> str:
    dt = (dt or now_local(settings)).astimezone(ZoneInfo(settings.app_timezone))
    return f"{dt.month}/{dt.day}/{dt.year} {dt:%H:%M:%S}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
