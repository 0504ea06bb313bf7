import argparse
import asyncio
import sys

from loguru import logger

from lunix_monitor import settings
from lunix_monitor.dashboard import SensorDashboard, SensorMonitor
from lunix_monitor.sensors import SamplingEngine


def configure_logging() -> None:
    """Keep loguru off the terminal; the dashboard owns the screen."""
    logger.remove()
    if settings.LOG_FILE:
        # Raises ValueError for an unknown level name
        logger.add(settings.LOG_FILE, level=settings.LOG_LEVEL, enqueue=False, backtrace=False)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Lunix sensor monitor."""
    parser = argparse.ArgumentParser(
        prog="lunix-monitor",
        description=(
            "Live terminal view of every Lunix:TNG sensor. Tuning is done through "
            "LUNIX_* environment variables; press 'q' to quit."
        ),
    )
    parser.parse_args(argv)

    try:
        configure_logging()
        config = settings.MonitorConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"lunix-monitor: invalid configuration: {e}", file=sys.stderr)
        return 2

    engine = SamplingEngine(config)
    engine.open()

    dashboard = SensorDashboard()
    try:
        dashboard.start()
    except Exception as e:
        logger.exception(f"Failed to initialize the terminal: {e}")
        engine.release()
        print(f"lunix-monitor: failed to initialize the terminal: {e}", file=sys.stderr)
        return 1

    monitor = SensorMonitor(engine=engine, presenter=dashboard, refresh_interval=config.refresh_interval)
    try:
        return asyncio.run(monitor.run())
    except KeyboardInterrupt:
        engine.release()
        return 0
    finally:
        dashboard.stop()


if __name__ == "__main__":
    sys.exit(main())
