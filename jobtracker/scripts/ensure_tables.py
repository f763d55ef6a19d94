"""
Create any missing tables (users, auth_sessions, applications,
past_action_notifications, connections) without touching existing data.
Usage: python -m jobtracker.scripts.ensure_tables
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from jobtracker.database import ensure_tables_exist


def main():
    created = ensure_tables_exist()
    if created:
        print(f"Created tables: {', '.join(created)}")
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
