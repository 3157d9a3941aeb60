"""Run one expiry sweep by hand, outside the server's timer.

Deletes every shared note whose expiry has passed, along with the note it
points at. The running server does the same thing every six hours; use this
after downtime or to inspect what the next sweep would remove.

Usage:
    python scripts/sweep_expired.py [--dry-run] [--db-url URL]
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

_ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_ROOT_DIR))

load_dotenv(_ROOT_DIR / ".env")

_pre = argparse.ArgumentParser(add_help=False)
_pre.add_argument("--db-url", default=os.environ.get("DATABASE_URL", ""))
_pre_args, _ = _pre.parse_known_args()
if _pre_args.db_url:
    os.environ["DATABASE_URL"] = _pre_args.db_url

from blankpage.db import create_tables, make_engine, make_session_factory  # noqa: E402
from blankpage.services.notes import utcnow  # noqa: E402
from blankpage.services.sweeper import find_expired, sweep_expired  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Delete expired shared notes and their notes.")
    parser.add_argument(
        "--db-url",
        default=os.environ.get("DATABASE_URL", ""),
        help="Database connection URL (defaults to $DATABASE_URL)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List expired shares without deleting anything.",
    )
    args = parser.parse_args()

    try:
        engine = make_engine(args.db_url or None)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    create_tables(engine)
    factory = make_session_factory(engine)

    now = utcnow()
    db = factory()
    try:
        if args.dry_run:
            print("DRY RUN: no changes will be written.\n")
            expired = find_expired(db, now)
            for shared in expired:
                print(f"  WOULD DELETE  share {shared.id}  note {shared.note_id}  (expired {shared.expires_at:%Y-%m-%d %H:%M})")
            print(f"\nDone: {len(expired)} expired share(s) found.")
            return

        removed = sweep_expired(db, now)
        print(f"Done: {removed} expired share(s) deleted.")
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
