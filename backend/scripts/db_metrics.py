"""Print a JSON snapshot of pool usage and profile table sizes."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Dict

from sqlalchemy import func, select, text
from sqlalchemy.engine import Engine

from app.db.models import AuditEventModel, CoachProfileModel, UserModel
from app.db.monitoring import get_pool_snapshot
from app.db.session import get_engine

LOGGER = logging.getLogger("realty_coach.db_metrics")

_COUNTED = {
    "users": UserModel,
    "coach_profiles": CoachProfileModel,
    "audit_events": AuditEventModel,
}


def table_counts(engine: Engine) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    with engine.connect() as connection:
        for name, model in _COUNTED.items():
            counts[name] = int(connection.execute(select(func.count()).select_from(model)).scalar_one())
    return counts


def collect(engine: Engine) -> Dict[str, object]:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "pool": get_pool_snapshot(engine),
        "tables": table_counts(engine),
    }


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    try:
        print(json.dumps(collect(get_engine())))
        return 0
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Failed to collect database metrics: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
