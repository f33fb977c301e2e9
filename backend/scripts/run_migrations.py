"""Apply Alembic migrations once the profile database accepts connections.

Deploys run this before starting the API so the schema in ``alembic/versions``
is in place before any profile request is served.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError

LOGGER = logging.getLogger("realty_coach.migrations")
DATABASE_URL_PLACEHOLDER = "%(REALTY_COACH_DATABASE_URL)s"
DEFAULT_TIMEOUT = int(os.getenv("REALTY_COACH_DB_MIGRATION_TIMEOUT", "60"))
DEFAULT_POLL_INTERVAL = float(os.getenv("REALTY_COACH_DB_MIGRATION_POLL_INTERVAL", "3"))
SCRIPT_DIR = Path(__file__).resolve().parent
BACKEND_ROOT = SCRIPT_DIR.parent


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upgrade the profile database schema.")
    parser.add_argument(
        "--revision",
        default=os.getenv("REALTY_COACH_DB_MIGRATION_REVISION", "head"),
        help="Revision identifier to upgrade to (default: head).",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds to wait for the database to accept connections (default: {DEFAULT_TIMEOUT}).",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between readiness probes (default: {DEFAULT_POLL_INTERVAL}).",
    )
    parser.add_argument(
        "--config",
        default=str(BACKEND_ROOT / "alembic.ini"),
        help="Path to the alembic.ini file.",
    )
    return parser.parse_args(argv)


def get_alembic_config(config_path: Optional[str] = None) -> Config:
    config = Config(config_path) if config_path and Path(config_path).exists() else Config()
    config.set_main_option("script_location", str(BACKEND_ROOT / "alembic"))
    return config


def resolve_database_url(config: Config) -> str:
    url = config.get_main_option("sqlalchemy.url")
    if not url or url == DATABASE_URL_PLACEHOLDER:
        env_url = os.getenv("REALTY_COACH_DATABASE_URL")
        if env_url:
            config.set_main_option("sqlalchemy.url", env_url)
            return env_url
        raise RuntimeError("REALTY_COACH_DATABASE_URL must be set before running migrations.")
    return url


def head_revision(config: Config) -> Optional[str]:
    return ScriptDirectory.from_config(config).get_current_head()


def wait_for_database(database_url: str, *, timeout: int, poll_interval: float) -> None:
    """Poll until ``SELECT 1`` succeeds or ``timeout`` seconds pass."""
    deadline = time.time() + timeout
    engine: Optional[Engine] = None
    last_error: Optional[Exception] = None

    try:
        engine = create_engine(database_url, future=True, pool_pre_ping=True)
        while time.time() < deadline:
            try:
                with engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
                LOGGER.info("Database is reachable.")
                return
            except OperationalError as exc:  # not accepting connections yet
                last_error = exc
                LOGGER.warning("Database not ready yet: %s", exc)
            except SQLAlchemyError as exc:
                last_error = exc
                LOGGER.error("Database error during readiness probe: %s", exc)
                break
            time.sleep(poll_interval)
    finally:
        if engine is not None:
            engine.dispose()

    raise RuntimeError("Database did not become ready in time.") from last_error


def run_migrations(
    revision: str,
    *,
    timeout: int,
    poll_interval: float,
    config: Optional[Config] = None,
) -> None:
    config = config or get_alembic_config(str(BACKEND_ROOT / "alembic.ini"))
    database_url = resolve_database_url(config)
    LOGGER.info(
        "Upgrading profile schema to %s (timeout=%ss poll=%ss)",
        revision,
        timeout,
        poll_interval,
    )
    wait_for_database(database_url, timeout=timeout, poll_interval=poll_interval)
    command.upgrade(config, revision)
    LOGGER.info("Profile schema is at %s.", revision)


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("REALTY_COACH_DB_MIGRATION_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    args = parse_args(argv)
    try:
        config = get_alembic_config(args.config)
        run_migrations(
            args.revision,
            timeout=args.timeout,
            poll_interval=args.poll_interval,
            config=config,
        )
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Migration run failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
