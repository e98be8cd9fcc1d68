"""Formatting helpers for upload metadata."""
from datetime import datetime
from zoneinfo import ZoneInfo


KOLLUS_TIMEZONE = ZoneInfo('Asia/Seoul')

_SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB', 'TB')


def format_expire_time(timestamp: int, tz=KOLLUS_TIMEZONE) -> str:
    """Formats a Unix timestamp as local time (Korea Standard Time by default)."""
    return datetime.fromtimestamp(timestamp, tz).strftime('%Y-%m-%d %H:%M:%S')


def format_file_size(num_bytes: int) -> str:
    """Formats a byte count as a readable size, e.g. '1.5 MB'."""
    if num_bytes <= 0:
        return '0 Bytes'
    
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    
    value = round(value, 2)
    if value.is_integer():
        value = int(value)
    return f"{value} {_SIZE_UNITS[unit]}"
