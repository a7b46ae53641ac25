"""Display formatting for paces and durations."""

from typing import Optional


def format_pace(seconds_per_km: Optional[float], placeholder: str = "--:--") -> str:
    """Format pace in seconds/km to mm:ss string."""
    if seconds_per_km is None:
        return placeholder
    minutes = int(seconds_per_km // 60)
    seconds = int(seconds_per_km % 60)
    return f"{minutes}:{seconds:02d}"


def format_duration(total_seconds: float) -> str:
    """Format time in seconds to H:MM:SS, or M:SS under an hour."""
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    seconds = int(total_seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_whole(value: Optional[float], placeholder: str = "--") -> str:
    """Format a value rounded to a whole number (bpm, meters)."""
    if value is None:
        return placeholder
    return f"{value:.0f}"
