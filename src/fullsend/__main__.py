#!/usr/bin/env python3
"""
$FULLSEND Community Challenge: single-player arcade flyer.
Run with `python -m fullsend`.
"""

from .client import FullsendClient
from .config import load_config
from .logger import get_logger, setup_logging
from .session import GameSession
from .storage import ProgressStore, SqliteStore

log = get_logger("main")


def main():
    config = load_config()
    setup_logging(config.log_level, config.log_file)

    store = SqliteStore(config.db_file)
    session = GameSession(ProgressStore(store), width=config.width, height=config.height)
    log.info(f"Starting at {config.width}x{config.height}, progress in {config.db_file}")

    try:
        FullsendClient(session, config).run()
    except KeyboardInterrupt:
        log.info("Interrupted")
    finally:
        store.close()


if __name__ == "__main__":
    main()
