import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger


DOTENV_PATH = os.getenv("DOTENV_PATH", ".env")
if os.path.exists(DOTENV_PATH):
    load_dotenv(dotenv_path=DOTENV_PATH)
else:
    logger.debug(f"No .env file found at {DOTENV_PATH}, using defaults/environment variables")


# Raw values, converted and validated by MonitorConfig.from_env()

# Sensors
SENSOR_COUNT = os.getenv("LUNIX_SENSOR_COUNT", "16")
DEVICE_DIR = os.getenv("LUNIX_DEVICE_DIR", "/dev")

# Dashboard
REFRESH_INTERVAL = os.getenv("LUNIX_REFRESH_INTERVAL", "0.1")  # seconds between ticks

# Logging (no sink unless a file is given, the dashboard owns the terminal)
LOG_FILE = os.getenv("LUNIX_LOG_FILE") or None
LOG_LEVEL = os.getenv("LUNIX_LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True, slots=True)
class MonitorConfig:
    """Runtime options for the sampling engine and driver loop."""

    sensor_count: int = 16
    device_dir: Path = Path("/dev")
    refresh_interval: float = 0.1

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Build the config from the LUNIX_* environment values."""
        try:
            sensor_count = int(SENSOR_COUNT)
        except ValueError:
            raise ValueError(f"LUNIX_SENSOR_COUNT must be an integer, got {SENSOR_COUNT!r}") from None
        try:
            refresh_interval = float(REFRESH_INTERVAL)
        except ValueError:
            raise ValueError(f"LUNIX_REFRESH_INTERVAL must be a number, got {REFRESH_INTERVAL!r}") from None
        return cls(sensor_count=sensor_count, device_dir=Path(DEVICE_DIR), refresh_interval=refresh_interval)

    def __post_init__(self) -> None:
        if self.sensor_count < 0:
            raise ValueError(f"sensor_count must be non-negative, got {self.sensor_count}")
        if self.refresh_interval < 0:
            raise ValueError(f"refresh_interval must be non-negative, got {self.refresh_interval}")
        # Accept plain strings for the device directory
        object.__setattr__(self, "device_dir", Path(self.device_dir))
