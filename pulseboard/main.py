"""PulseBoard - application bootstrap.

Loads the environment and configuration, sets up logging and builds the
Store that presentation code receives.
"""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from pulseboard.shared.core.configuration import ConfigManager, LoggingConfig, SystemConfig
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.core.scheduler import AsyncioScheduler
from pulseboard.state import Store

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger.

    Console shows WARNING and above. When ``log_file`` is set, a rotating
    file handler records everything at the configured level.
    """
    level = getattr(logging, config.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    if config.log_file:
        log_file_path = Path(config.log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    # asyncio is chatty at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logger.info(f"Logging configured: level={config.level}, file={config.log_file}")


def load_config(config_dir: Optional[Path] = None) -> SystemConfig:
    """Load .env and the merged configuration."""
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env")
    return ConfigManager(config_dir or PROJECT_ROOT / "config").get_config()


async def main(config: Optional[SystemConfig] = None) -> Store:
    """Build the store and run the initial dashboard load."""
    config = config or load_config()
    configure_logging(config.logging)

    scheduler = AsyncioScheduler()
    store = Store.create(config, event_bus=EventBus(), scheduler=scheduler)

    store.metrics.load()
    await scheduler.wait_until_idle()
    await store.bus.wait_until_idle()

    prefs = store.preferences.snapshot()
    logger.info(
        f"Dashboard ready: {store.directory.user_count} users, "
        f"revenue {store.metrics.total_revenue}, theme {prefs.theme_mode.value}/{prefs.theme_color.value}"
    )
    return store


if __name__ == "__main__":
    asyncio.run(main()).close()
