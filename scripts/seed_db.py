from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from staff_attendance.container import build_container
from staff_attendance.core.enums import Role
from staff_attendance.core.exceptions import EmailAlreadyRegisteredError
from staff_attendance.main import load_settings

DEMO_USERS = [
    ("Manager Demo", "manager@example.com", "manager123", "Operations", Role.MANAGER),
    ("Alice Nguyen", "alice@example.com", "employee123", "Engineering", Role.EMPLOYEE),
    ("Bob Tran", "bob@example.com", "employee123", "Sales", Role.EMPLOYEE),
]


def main() -> None:
    settings = load_settings()
    container = build_container(settings=settings)

    for name, email, password, department, role in DEMO_USERS:
        try:
            user = container.user_service.register(
                name=name, email=email, password=password, department=department, role=role
            )
            print(f"OK: {user.employee_code} {email} ({role.value})")
        except EmailAlreadyRegisteredError:
            print(f"SKIP: {email} already registered")


if __name__ == "__main__":
    main()
