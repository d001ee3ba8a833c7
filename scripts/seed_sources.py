#!/usr/bin/env python3
"""
Seed script to create one Source row per configured news API.

Usage:
    python scripts/seed_sources.py
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.orm import Session
from aggregator.config import get_settings
from aggregator.database import SessionLocal, init_db
from aggregator import models
from aggregator.source_profiles import build_source_profiles


def seed_sources(db: Session, profiles) -> int:
    """Seed the sources table from the source profiles. Returns rows added."""
    print("Seeding sources...")
    added = 0

    for profile in profiles.values():
        existing = db.query(models.Source).filter(
            models.Source.api_identifier == profile.identifier
        ).first()

        if existing:
            print(f"  Source '{profile.identifier}' already exists, skipping.")
            continue

        source = models.Source(
            name=profile.name,
            api_identifier=profile.identifier,
            website_url=profile.website_url,
            description=profile.description,
            is_active=True,
        )
        db.add(source)
        added += 1
        print(f"  Added source: {profile.name} ({profile.identifier})")

    db.commit()
    print(f"Done! {len(profiles)} sources configured.")
    return added


if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        seed_sources(db, build_source_profiles(get_settings()))
    finally:
        db.close()
