"""Load demo users and coach profiles from a JSON file.

The file holds a list of entries shaped like::

    {"user": {...UserRegistration...},
     "general": {...GeneralFormData...},
     "specialties": ["REALTOR"],
     "coach": {...CoachProfileFormData...}}

Only ``user`` is required. Users whose email already exists are skipped.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.db.session import create_schema
from app.profile_errors import ProfileActionError
from app.profile_schemas import CoachProfileFormData, GeneralFormData, UserRegistration
from app.profile_store import profile_store

logger = logging.getLogger("realty_coach.seed")


def _load_entries(path: Path) -> List[Dict[str, Any]]:
    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("profiles", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of profile entries")
    return [entry for entry in payload if isinstance(entry, dict)]


def seed_entry(entry: Dict[str, Any]) -> Optional[str]:
    """Create one user and the sections present in ``entry``; returns the new user id."""
    registration = UserRegistration.model_validate(entry["user"])
    user = profile_store.create_user(registration)
    if entry.get("general"):
        profile_store.update_general_profile(user.id, GeneralFormData.model_validate(entry["general"]))
    if entry.get("specialties"):
        profile_store.save_specialties(user.id, entry["specialties"])
    if entry.get("coach"):
        coach = CoachProfileFormData.model_validate(entry["coach"])
        profile_store.create_coach_profile_if_needed(user.id)
        if coach.languages:
            profile_store.update_user_languages(user.id, coach.languages)
        profile_store.update_coach_profile(user.id, coach)
    return user.id


def seed(path: Path) -> int:
    created = 0
    for index, entry in enumerate(_load_entries(path)):
        if "user" not in entry:
            logger.warning("Skipping entry %d without a user block", index)
            continue
        try:
            user_id = seed_entry(entry)
        except ValidationError as exc:
            logger.warning("Skipping invalid entry %d: %s", index, exc)
            continue
        except ProfileActionError as exc:
            logger.warning("Skipping entry %d: %s", index, exc.message)
            continue
        logger.info("Seeded user %s", user_id)
        created += 1
    logger.info("Seeded %d profiles from %s", created, path)
    return created


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed profile data from a JSON file.")
    parser.add_argument("path", type=Path, help="JSON file with profile entries.")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding (development databases only).",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    if args.create_schema:
        create_schema()
    try:
        seed(args.path)
    except (OSError, ValueError) as exc:
        logger.error("Seeding failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
