"""Utility script to register an employee in the shared directory."""

from __future__ import annotations

import argparse

from ho_connect.application.state import AppState, load_collections
from ho_connect.application.use_cases.sessions import register_employee
from ho_connect.domain.entities import JobLevel
from ho_connect.infrastructure.database import SessionLocal, initialize_database
from ho_connect.infrastructure.record_store import RecordStore, RecordStoreError
from ho_connect.infrastructure.serialization import decode_payload
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for employee creation."""

    parser = argparse.ArgumentParser(
        description="Register an employee of the HO Connect directory.",
    )
    parser.add_argument("--name", required=True, help="Display name used for @mentions")
    parser.add_argument("--department", required=True, help="Department of the employee")
    parser.add_argument("--role", default="", help="Job title (optional)")
    parser.add_argument(
        "--level",
        choices=[level.value for level in JobLevel],
        default=JobLevel.STAFF.value,
        help="Seniority level (default: staff)",
    )
    return parser.parse_args()


def main() -> None:
    """Create an employee using the provided command line arguments."""

    args = parse_args()

    initialize_database()
    store = RecordStore(SessionLocal)
    try:
        state = load_collections(store, AppState())
        employee = register_employee(
            state,
            store,
            name=args.name,
            department=args.department,
            role=args.role,
            level=JobLevel(args.level),
            origin=None,
        )
        stored = decode_payload(EMPLOYEES_KEY, store.read_raw(EMPLOYEES_KEY))
    except ValueError as exc:
        raise SystemExit(f"Could not create the employee: {exc}") from exc
    except RecordStoreError as exc:
        raise SystemExit(f"Could not save the directory: {exc}") from exc

    if not any(item.id == employee.id for item in stored):
        raise SystemExit("Could not save the directory, see the log for details.")

    print(
        "Employee created:\n"
        f"  ID: {employee.id}\n"
        f"  Name: {employee.name}\n"
        f"  Department: {employee.department}"
    )


if __name__ == "__main__":
    main()
