"""Connection pool instrumentation for the health endpoint and metrics script."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Dict, Tuple

from sqlalchemy import event
from sqlalchemy.engine import Engine

from ..telemetry import emit_event


@dataclass
class PoolCounters:
    connects: int = 0
    checkouts: int = 0
    checkins: int = 0
    last_emit: float = 0.0


# Engines stay referenced here, keeping their ids unique.
_COUNTERS: Dict[int, Tuple[Engine, PoolCounters]] = {}
_TELEMETRY_INTERVAL = float(os.getenv("REALTY_COACH_DB_TELEMETRY_INTERVAL", "30"))


def instrument_engine(engine: Engine) -> None:
    """Attach pool listeners that count connections and emit throttled snapshots."""
    key = id(engine)
    if key in _COUNTERS:
        return

    counters = PoolCounters()
    _COUNTERS[key] = (engine, counters)

    def publish(trigger: str) -> None:
        now = time.time()
        if _TELEMETRY_INTERVAL > 0 and (now - counters.last_emit) < _TELEMETRY_INTERVAL:
            return
        counters.last_emit = now
        emit_event(
            "db_pool_status",
            trigger=trigger,
            dialect=engine.dialect.name,
            status=_pool_status(engine),
            connects=counters.connects,
            checkouts=counters.checkouts,
            checkins=counters.checkins,
        )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        counters.connects += 1
        publish("connect")

    @event.listens_for(engine, "checkout")
    def _on_checkout(dbapi_connection, connection_record, connection_proxy) -> None:  # type: ignore[no-untyped-def]
        counters.checkouts += 1
        publish("checkout")

    @event.listens_for(engine, "checkin")
    def _on_checkin(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        counters.checkins += 1
        publish("checkin")


def get_pool_snapshot(engine: Engine) -> Dict[str, object]:
    entry = _COUNTERS.get(id(engine))
    counters = entry[1] if entry is not None else PoolCounters()
    return {
        "dialect": engine.dialect.name,
        "status": _pool_status(engine),
        "connects": counters.connects,
        "checkouts": counters.checkouts,
        "checkins": counters.checkins,
        "checked_out": max(counters.checkouts - counters.checkins, 0),
    }


def _pool_status(engine: Engine) -> str:
    try:
        return engine.pool.status()  # type: ignore[no-untyped-call]
    except Exception as exc:  # pragma: no cover
        return f"unavailable: {exc}"


__all__ = [
    "get_pool_snapshot",
    "instrument_engine",
]
