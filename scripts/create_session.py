#!/usr/bin/env python3
"""
Issue a session token for local use of the API.

Sessions are normally created by the sign-in provider; this writes one
straight into the session table so the API can be exercised with
``Authorization: Bearer <token>``.

Usage:
    python scripts/create_session.py --email me@example.com --name Me --days 30
"""

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.models import SessionLocal, init_database
from repositories import SessionRepository

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("create-session")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Create a PetMeal API session token")
    p.add_argument("--email", required=True, help="Account email (created if missing)")
    p.add_argument("--name", default="PetMeal User", help="Account display name")
    p.add_argument("--days", type=int, default=7, help="Session lifetime in days")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    init_database()
    db = SessionLocal()
    try:
        repo = SessionRepository(db)
        user = repo.get_or_create_user(args.email, args.name)
        session = repo.create_session(user, ttl=timedelta(days=args.days))
        logger.info(f"Session for {user.email} expires {session.expires_at.isoformat()}")
        print(session.token)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
