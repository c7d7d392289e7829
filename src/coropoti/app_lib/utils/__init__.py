# Re-export for convenience
from .dates import combine, is_weekend, normalize_date, normalize_time, time_to_minutes
from .formatters import format_date, format_date_range, format_time, format_time_range

__all__ = [
    'combine',
    'is_weekend',
    'normalize_date',
    'normalize_time',
    'time_to_minutes',
    'format_date',
    'format_date_range',
    'format_time',
    'format_time_range',
]
