"""Utility functions for the dashboard."""

MONITOR_TITLE = "Lunix:TNG Sensor Monitor (Press 'q' to quit)"
POLLING_DISCLAIMER = "[This version uses Polling - It does not support Wait-Wake]"
POLLING_STATUS = "Status: Active Polling (O_NONBLOCK)..."
OFFLINE_MARKER = "OFFLINE"
QUIT_KEYS = frozenset({"q", "Q"})


def format_sensor_id(index: int) -> str:
    return f"Sensor {index:02d}"


def format_uptime(seconds: float) -> str:
    """Render elapsed seconds as HH:MM:SS."""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
