"""
Delete login sessions from the database.
By default only expired sessions are removed; --all logs everyone out.
Usage: python -m jobtracker.scripts.clear_sessions [--all] [--yes]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from jobtracker.database import SessionLocal, init_db
from jobtracker.repos.session_repo import delete_all, delete_expired


def main(argv=None):
    parser = argparse.ArgumentParser(description="Delete expired (or all) login sessions.")
    parser.add_argument("--all", action="store_true", help="Delete every session, logging all users out")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation prompt for --all")
    args = parser.parse_args(argv)

    if args.all and not args.yes:
        try:
            reply = input("This logs out every user. Type 'yes' to continue: ").strip().lower()
        except EOFError:
            reply = ""
        if reply != "yes":
            print("Aborted.")
            sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        deleted = delete_all(db) if args.all else delete_expired(db)
    finally:
        db.close()
    print(f"Deleted {deleted} session(s).")
    return deleted


if __name__ == "__main__":
    main()
