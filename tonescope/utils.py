"""
tonescope.utils - Shared display helpers.

Contains formatting functions used by the CLI and the audio loader.
"""

from __future__ import annotations

from tonescope.models import RiskLevel


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (HH:MM:SS if >= 1 hour, otherwise MM:SS)
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_file_size(size: float) -> str:
    """Format a byte count in human-readable units."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def get_risk_style(level: RiskLevel) -> str:
    """Get the rich style used to render a risk level.

    Args:
        level: Conflict risk level

    Returns:
        Style name: "green" (low), "yellow" (medium), or "red" (high)
    """
    if level == RiskLevel.HIGH:
        return "red"
    elif level == RiskLevel.MEDIUM:
        return "yellow"
    return "green"
