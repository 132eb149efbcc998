from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware current time in UTC. Default clock for tracking sessions."""
    return datetime.now(timezone.utc)


def hhmmss_to_seconds(hhmmss: str) -> int:
    """
    Convert 'HH:MM:SS' -> total seconds (int).
    Example: '00:45:32' -> 2732
    """
    parts = hhmmss.split(":")
    if len(parts) != 3:
        raise ValueError("Duration must be in HH:MM:SS format")

    hours, minutes, seconds = map(int, parts)
    if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
        raise ValueError("Duration must be in HH:MM:SS format")
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_hhmmss(total_seconds: float) -> str:
    """
    Convert total seconds -> 'HH:MM:SS' (fractions are truncated).
    Example: 2732 -> '00:45:32'
    """
    total_seconds = int(total_seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_pace(pace_minutes: float | None) -> str | None:
    """
    Format a pace in decimal minutes as 'M:SS'.
    Example: 5.5 -> '5:30'
    """
    if pace_minutes is None:
        return None
    total = int(round(pace_minutes * 60))
    return f"{total // 60}:{total % 60:02d}"


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            return dt.astimezone()
    return dt.astimezone()
